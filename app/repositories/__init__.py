"""
Repositories package

Each repository encapsulates the queries for one model:
- account_repository.py
- website_repository.py
- session_repository.py
- pageview_repository.py (includes the reporting aggregates)
- event_repository.py

Usage:
    from repositories.website_repository import WebsiteRepository
    website = WebsiteRepository.get_by_uuid(website_uuid)
"""
