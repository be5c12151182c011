"""Ravisabha attendance package.

Organized by feature modules (members, ravisabha, attendance, views, export)
with a thin Flask controller layer over service/repository layers.
"""
