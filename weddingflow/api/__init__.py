"""
REST routers for the seating engine
"""
