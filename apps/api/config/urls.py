"""
URL configuration for the Rx prescriptions API.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)
from apps.core.observability.health import HealthzView, ReadyzView

urlpatterns = [
    # Health checks (no auth required)
    path('healthz', HealthzView.as_view(), name='healthz'),
    path('readyz', ReadyzView.as_view(), name='readyz'),

    # Admin
    path('admin/', admin.site.urls),

    # Public share downloads (token is the credential)
    path('', include('apps.documents.urls')),

    # Private API (authentication required)
    path('api/', include('apps.core.urls')),  # JWT tokens, current user
    path('api/v1/', include('apps.authz.urls')),  # Doctor profile
    path('api/v1/', include('apps.clinical.urls')),  # Patients, history
    path('api/v1/', include('apps.catalog.urls')),  # Medicines, investigations
    path('api/v1/', include('apps.prescriptions.urls')),
    path('api/v1/', include('apps.certificates.urls')),

    # API Schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/schema/swagger-ui/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/schema/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]

# Serve media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
