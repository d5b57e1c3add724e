"""State layer.

Owns the property-store boundary, the property definitions and the
cached charge limits shared by the poll cycle and the command dispatcher.
"""
