from storefront.schemas.seller_payment_schemas import SellerPaymentList
from storefront.services.api_client import ApiClient
from storefront.utils.pagination import build_query_params


class SellerPaymentsService:
    """A seller's earnings from delivered orders."""

    def __init__(self, api: ApiClient):
        self.api = api

    def list_payments(self, page: int = 1, status: str = "all", limit: int = 10) -> SellerPaymentList:
        params = build_query_params(page, limit, status=status)
        data = self.api.get(
            "/api/seller/payments",
            params=params,
            error_message="Failed to load payments",
        )
        return SellerPaymentList.model_validate(data)

    def total_due(self, payments: SellerPaymentList) -> float:
        return round(
            sum(p.net_amount for p in payments.payments if p.payment_status == "due"),
            2,
        )
