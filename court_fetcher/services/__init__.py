"""Service layer: case synthesis, placeholder documents, auditing"""
