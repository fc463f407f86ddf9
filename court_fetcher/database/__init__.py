"""Audit database: engine, session factory and models"""
