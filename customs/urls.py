from django.urls import path

from customs.views import CustomCreateView, CustomDetailView, CustomIdListView, CustomListView

urlpatterns = [
    path('', CustomCreateView.as_view(), name='custom-create'),
    path('id-list/', CustomIdListView.as_view(), name='custom-id-list'),
    path('list/<int:cocktail_id>/', CustomListView.as_view(), name='custom-list'),
    path('<int:pk>/', CustomDetailView.as_view(), name='custom-detail'),
]
