from django.shortcuts import get_object_or_404
from rest_framework import status, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from product.models import Product
from .serializers import AddCartItemSerializer, UpdateCartItemSerializer, CartSerializer
from .services import summarize_cart
from .store import CartStore, cart_key_for_request


class CartMixin:
    """Guests get a cart too, keyed by their IP address."""
    permission_classes = [permissions.AllowAny]

    def get_store(self):
        return CartStore()

    def get_cart_key(self):
        return cart_key_for_request(self.request)

    def cart_response(self, cart, message=None, status_code=status.HTTP_200_OK):
        data = CartSerializer(summarize_cart(cart), context={"request": self.request}).data
        if message:
            data = {"message": message, "cart": data}
        return Response(data, status=status_code)


class CartAPIView(CartMixin, APIView):
    def get(self, request, format=None):
        cart = self.get_store().get(self.get_cart_key())
        return self.cart_response(cart)

    def post(self, request, format=None):
        """
        Expected payload:
        {
            "product_id": <id>,
            "quantity": <1..10>
        }
        """
        serializer = AddCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        # inactive products exist but cannot be bought
        product = get_object_or_404(Product.objects.active(), pk=serializer.validated_data["product_id"].pk)

        cart = self.get_store().add_item(
            self.get_cart_key(), product.id, serializer.validated_data["quantity"]
        )
        return self.cart_response(cart, "Item added to cart", status.HTTP_201_CREATED)

    def delete(self, request, format=None):
        self.get_store().clear(self.get_cart_key())
        return Response({"message": "Cart cleared"}, status=status.HTTP_200_OK)


class CartItemAPIView(CartMixin, APIView):
    def put(self, request, product_id, format=None):
        """ Overwrite the quantity of one line, 0 removes it. """
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        quantity = serializer.validated_data["quantity"]

        store = self.get_store()
        key = self.get_cart_key()
        if quantity > 0 and product_id not in store.get(key):
            get_object_or_404(Product.objects.active(), pk=product_id)

        cart = store.set_quantity(key, product_id, quantity)
        return self.cart_response(cart, "Cart updated")

    def delete(self, request, product_id, format=None):
        cart = self.get_store().remove_item(self.get_cart_key(), product_id)
        return self.cart_response(cart, "Item removed from cart")
