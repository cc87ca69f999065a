from .plant import Plant, PlantStatus, PlantType

__all__ = ["Plant", "PlantStatus", "PlantType"]
