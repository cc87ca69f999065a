"""
Infrastructure layer package for the PlantSwap API.
Provides the Supabase table gateway and the image storage client.
"""
