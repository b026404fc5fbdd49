"""Servicios del Core: compilación de configuración y orquestación de peticiones."""
