"""Servicios del Core: catálogo de operaciones, binder y render.

Estos módulos no hacen I/O; el transporte vive en `adapters.transport`.
"""
