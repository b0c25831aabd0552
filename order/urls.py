from django.urls import path
from .views import OrderListAPIView, CheckoutAPIView, OrderDownloadAPIView

urlpatterns = [
    path("", OrderListAPIView.as_view(), name="order-list"),
    path("checkout/", CheckoutAPIView.as_view(), name="order-checkout"),
    # public: the download token is the credential
    path("<int:pk>/download/", OrderDownloadAPIView.as_view(), name="order-download"),
]
