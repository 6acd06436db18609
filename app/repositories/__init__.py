"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Holds the generic CRUD repository and the bug record store adapter
the services depend on.
"""
