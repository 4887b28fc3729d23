"""
utils package
-------------

Contains utility modules used throughout the scheduling application.

Includes the configuration constants, the logger, teacher availability helpers,
school data validation and the JSON loader.
"""
