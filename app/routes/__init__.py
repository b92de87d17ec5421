"""
Routes package - Flask blueprints for the JSON API
"""
