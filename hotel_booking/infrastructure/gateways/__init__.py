from hotel_booking.infrastructure.gateways.tbo_supplier_gateway import TboHotelSupplierGateway

__all__ = ["TboHotelSupplierGateway"]
