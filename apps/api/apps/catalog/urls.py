"""
Catalog URLs - Medicines and investigations
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import MedicineViewSet, InvestigationViewSet

router = DefaultRouter()
router.register(r'medicines', MedicineViewSet, basename='medicine')
router.register(r'investigations', InvestigationViewSet, basename='investigation')

urlpatterns = [
    path('', include(router.urls)),
]
