"""Adaptadores de infraestructura: ficheros, plantillas, motor y formato de sobre."""
