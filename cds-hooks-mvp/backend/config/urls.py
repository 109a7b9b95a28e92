from django.urls import include, path

urlpatterns = [
    path('', include('cdshooks.urls')),
]

handler404 = 'cdshooks.views.not_found'
