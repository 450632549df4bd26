"""
SVGboard Backend — Storage Adapter
====================================

Thin async query functions over the ORM models. Every function takes the
request's AsyncSession first and never commits: the session dependency in
svgboard.database owns the transaction.
"""
