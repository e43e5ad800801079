"""
Test configuration: set up sys.path and environment variables
before any bot modules are imported.
"""
import os
import sys

# Add parent directory so that `import game`, `import bank`, etc. work
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Provide fake env vars so config.py can be imported without a real token
os.environ.setdefault("BOT_TOKEN", "123456789:AABBCCDDEEFFaabbccddeeff-GGHHIIjjkkll")
os.environ.setdefault("OPENAI_API_KEY", "")
