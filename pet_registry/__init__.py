"""
Pet registry: transactional persistence for pets and their identification chips.
"""
__version__ = "1.0.0"
