"""
Documents URLs - public share downloads (mounted at the site root)
"""
from django.urls import path

from .views import ShareDownloadView

urlpatterns = [
    path('share/<str:token>/', ShareDownloadView.as_view(), name='share-download'),
]
