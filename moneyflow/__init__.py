"""Personal finance dashboard API"""
