"""
Curio Configuration Module

- settings: module-level configuration values read from the environment
- credentials: API key lookup (environment variables or Google Secret Manager)
"""
