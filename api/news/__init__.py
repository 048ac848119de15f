"""
News posts: storage gateway, pagination/search logic and HTTP routes.
"""
