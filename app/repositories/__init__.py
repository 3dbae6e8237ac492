"""레포지토리 패키지: 데이터베이스 쿼리 계층.

Repository package. Pure database access for profiles, stores, service
requests, inquiries, notifications and auth tokens. Each repository
extends BaseRepository and adds its own queries; none of them commit.
"""
