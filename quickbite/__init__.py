"""QuickBite backend: cuentas, restaurantes y menús con auth JWT stateless."""

__version__ = "0.1.0"
