from django.urls import path
from .views import StockHistoryListAPIView, AdjustStockAPIView

urlpatterns = [
    path('history/', StockHistoryListAPIView.as_view(), name='inventory-history'),
    path('adjust/', AdjustStockAPIView.as_view(), name='inventory-adjust'),
]
