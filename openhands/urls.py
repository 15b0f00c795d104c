"""
URL configuration for the openhands project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Django admin
    path('admin/', admin.site.urls),

    # Core app – home redirect and role dashboards
    path('', include(('core.urls', 'core'), namespace='core')),

    # Accounts app – authentication & profiles
    path('accounts/', include(('accounts.urls', 'accounts'), namespace='accounts')),

    # Savings groups & cycles
    path('groups/', include(('savings_groups.urls', 'savings_groups'), namespace='savings_groups')),

    # Monthly reports, summaries and exports
    path('reports/', include(('reports.urls', 'reports'), namespace='reports')),

    # Savers: participation and movements
    path('savers/', include(('savers.urls', 'savers'), namespace='savers')),
]

# Media files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
