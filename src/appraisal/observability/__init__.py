"""Observability: structured logging, request IDs, metrics, health checks"""
