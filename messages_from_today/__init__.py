"""
Messages from Today - extracts up to three insightful messages from a daily
note using OpenAI, Gemini, or Claude, writes them back under a fixed
heading, and forwards chosen messages to an Airtable table.
"""
