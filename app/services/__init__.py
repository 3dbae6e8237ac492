"""서비스 패키지: 비즈니스 로직 계층.

Service package. Business rules for sign-in, the request wizard and
lifecycle, inquiries and notifications. Services call repositories,
flush their changes and leave the commit to the route.
"""
