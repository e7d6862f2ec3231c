"""
Integracion con la Cupid content API (fuente externa de hoteles).

- status.py: clasificacion de respuestas HTTP en exito / error tipado.
- client.py: cliente httpx (base URL, headers, timeout).
- parsers.py: body crudo -> entidades de dominio.

Se usa desde el job de sync (scripts/sync_hotels.py), no desde el
request/response del API.
"""
