"""
                        Yummify Server

Restaurant and menu management backend: restaurants, dishes and
ingredients scoped to the owning restaurant, with owner account
provisioning through an identity provider.

License: MIT
"""

__version__ = "1.0.0"
