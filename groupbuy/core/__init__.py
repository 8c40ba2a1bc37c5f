"""Core types and session plumbing shared by the blueprints."""
