from django.urls import path
from .views import PartnerAvailabilityView

urlpatterns = [
    path("partners/status/", PartnerAvailabilityView.as_view(), name="partner-status"),
]
