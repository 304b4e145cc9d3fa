from django.urls import path
from . import views

app_name = 'loyalty'

urlpatterns = [
    # Customer-facing endpoints
    path('summary/', views.get_loyalty_summary, name='summary'),
    path('transactions/', views.get_loyalty_transactions, name='transactions'),
    path('redeem/', views.redeem_reward, name='redeem'),

    # Staff endpoints
    path('overview/', views.get_loyalty_overview, name='overview'),
    path('bonus/', views.grant_bonus_points, name='bonus'),
]
