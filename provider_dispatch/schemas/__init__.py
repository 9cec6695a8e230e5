"""
schemas/ — Pydantic models for the dispatch engine

Typed inputs/outputs for the pure services and the HTTP routers. Models
validate shape at the boundary; the services never raise on degraded
values inside a valid shape.
"""
