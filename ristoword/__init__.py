"""
                RISTOWORD

Order and inventory tracking backend for a restaurant floor:
kitchen, cashier and storeroom share two JSON-backed collections.
"""

__version__ = "1.0.0"
