"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
The transition engine and view pipeline are pure; the bug and dashboard
services orchestrate them around record store calls.
"""
