"""
EdgeCache License Service Django project.
"""
