"""
Services module for business logic.

- domain/: Application services used by the routers

Usage:
    from rest_api.services.domain import get_order_info_service
    service = get_order_info_service(db)
    full_order = await service.get_full_order_info(order)
"""
