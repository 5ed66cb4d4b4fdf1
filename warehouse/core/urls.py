from django.urls import path
from .views import (
    login_view, signup_view, logout_view,
    profile_view, preferences_view, forbidden_view
)

urlpatterns = [
    # Auth pages
    path('login/', login_view, name='login'),
    path('signup/', signup_view, name='signup'),
    path('logout/', logout_view, name='logout'),
    path('403/', forbidden_view, name='forbidden'),

    # Current user
    path('profile/', profile_view, name='profile'),
    path('profile/preferences/', preferences_view, name='preferences'),
]
