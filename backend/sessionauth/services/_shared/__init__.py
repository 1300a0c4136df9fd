"""Shared service-layer primitives: errors, DTOs, ports and the base service."""
