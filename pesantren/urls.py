# pesantren/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Students / halaqat / attendance
    path('api/accounts/', include('apps.accounts.urls')),

    # Memorization records, progress and statistics
    path('api/hafalan/', include('apps.hafalan.urls')),

    # Campaigns and donations
    path('api/donations/', include('apps.donations.urls')),
]
