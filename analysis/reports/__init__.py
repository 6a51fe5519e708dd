"""Charts and narratives built from aggregate tables"""
