"""Core clipboard, link and storage components"""
