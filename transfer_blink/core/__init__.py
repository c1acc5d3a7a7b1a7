"""
Core: domain exceptions shared by the transfer engine and the API server.
"""
