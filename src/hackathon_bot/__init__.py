"""Bot Discord de gestion des événements et équipes de hackathon."""

__version__ = "0.1.0"
