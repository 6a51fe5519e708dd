"""Project-wide path configuration"""
