"""
Business services: document store, settings, extraction, assistant and exports.
"""
