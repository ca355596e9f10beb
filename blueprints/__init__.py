"""
Blueprints Package - Modular application structure
Each blueprint handles a specific domain of functionality
"""

__all__ = ['auth', 'pages', 'admin', 'api']
