import time

from django.http import FileResponse
from django.shortcuts import get_object_or_404
from rest_framework import status, permissions
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from cart.store import CartStore, cart_key_for_request
from .checkout import place_order
from .downloads import authorize_download, build_order_archive
from .models import Order
from .serializers import CheckoutSerializer, OrderSerializer


class OrderPagination(PageNumberPagination):
    page_size = 15
    page_size_query_param = "per_page"
    max_page_size = 100


class OrderListAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        """
        GET /api/v1/orders/ -> the user's orders, newest first
        """
        qs = Order.objects.filter(user=request.user).prefetch_related("items__product")

        paginator = OrderPagination()
        page = paginator.paginate_queryset(qs, request, view=self)
        serializer = OrderSerializer(page, many=True, context={"request": request})
        return paginator.get_paginated_response(serializer.data)


class CheckoutAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        """
        POST /api/v1/orders/checkout/
        Body: { "customer_email": "...", "payment_session_id": "..." }
        """
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = place_order(
            CartStore(),
            cart_key_for_request(request),
            customer_email=serializer.validated_data["customer_email"],
            payment_session_id=serializer.validated_data.get("payment_session_id"),
            user=request.user,
        )
        return Response(
            {
                "message": "Order created successfully",
                "order": OrderSerializer(order, context={"request": request}).data,
            },
            status=status.HTTP_201_CREATED,
        )


class OrderDownloadAPIView(APIView):
    # access is granted by the token, not by the session
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        """
        GET /api/v1/orders/<id>/download/?token=...&email=...
        """
        order = get_object_or_404(Order, pk=pk)
        authorize_download(
            order,
            token=request.query_params.get("token"),
            email=request.query_params.get("email"),
            user=request.user,
        )

        archive, _ = build_order_archive(order)
        filename = f"order_{order.id}_{int(time.time())}.zip"
        # FileResponse closes the temporary file once sent, which deletes it
        return FileResponse(archive, as_attachment=True, filename=filename, content_type="application/zip")
