"""
helperkit - file, logging and timing helpers.
"""
