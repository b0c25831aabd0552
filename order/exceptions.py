from rest_framework import status
from rest_framework.exceptions import APIException


class EmptyCart(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Cart is empty"
    default_code = "empty_cart"


class ProductUnavailable(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Product not found or inactive"
    default_code = "product_unavailable"

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found or inactive")


class InvalidDownloadToken(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Invalid download token"
    default_code = "invalid_token"


class OrderNotCompleted(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Order is not completed"
    default_code = "order_not_completed"


class OrderAccessDenied(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Unauthorized"
    default_code = "unauthorized"


class EmailVerificationRequired(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Email verification required"
    default_code = "email_verification_required"


class NoFilesFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "No files found for this order"
    default_code = "no_files_found"


class ArchiveCreationFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to create download archive"
    default_code = "archive_creation_failed"
