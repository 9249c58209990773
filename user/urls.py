from django.urls import path
from .adapters.viewsets import auth_viewset

urlpatterns = [
    path('register', auth_viewset.AuthViewSet.as_view({'post': 'register'}), name='register'),
    path('login', auth_viewset.AuthViewSet.as_view({'post': 'login'}), name='login'),
    path('me', auth_viewset.MeViewSet.as_view({'get': 'me', 'put': 'update_me'}), name='me'),
    path('change-password', auth_viewset.MeViewSet.as_view({'put': 'change_password'}), name='change_password'),
]
