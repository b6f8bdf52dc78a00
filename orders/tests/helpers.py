from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token

from orders.models import Order, OrderItem
from profiles.models import Profile
from restaurants.models import FoodItem, Restaurant

User = get_user_model()


def create_user_with_profile(username, t: str, **profile_fields):
    user = User.objects.create_user(username, f"{username}@example.com", "pass1234")
    profile = Profile.objects.create(user=user, type=t, **profile_fields)
    token = Token.objects.create(user=user)
    return user, profile, token


def create_admin(username="admin"):
    user = User.objects.create_user(username, f"{username}@example.com", "pass1234", is_staff=True)
    token = Token.objects.create(user=user)
    return user, token


def add_restaurant(owner_profile, name="Momo House", status=Restaurant.Status.OPEN):
    return Restaurant.objects.create(
        owner=owner_profile, name=name, location="Thamel, Kathmandu", status=status
    )


def add_food_item(restaurant, name="Chicken Momo", price=150, is_available=True):
    return FoodItem.objects.create(
        restaurant=restaurant, name=name, price=price, is_available=is_available
    )


def create_order(customer, restaurant, food_item, quantity=2, status="pending", partner=None, **extra):
    order = Order.objects.create(
        customer=customer,
        restaurant=restaurant,
        partner=partner,
        status=status,
        total=food_item.price * quantity + 50,
        delivery_fee=50,
        address="Thamel, Kathmandu",
        phone="9800000000",
        payment_method=Order.PaymentMethod.CASH,
        estimated_delivery_time=30,
        **extra,
    )
    OrderItem.objects.create(
        order=order, food_item=food_item, quantity=quantity, price=food_item.price
    )
    return order
