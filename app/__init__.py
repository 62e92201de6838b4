"""
Flask web layer for the Knowledge Hub Recommendation Service.
"""
