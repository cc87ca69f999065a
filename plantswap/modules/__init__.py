"""
Feature modules of the PlantSwap API: listings, profiles, exchanges, notifications.
"""
