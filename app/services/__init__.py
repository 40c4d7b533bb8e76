"""Business services: save file import and auto-population"""
