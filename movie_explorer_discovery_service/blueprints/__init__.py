"""HTTP blueprints"""
