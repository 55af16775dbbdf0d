"""
EPP Transport CLI

Command-line tool for sending raw EPP documents over a configured transport.
"""
