from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('', views.dashboard, name='dashboard'),
    path('files/upload/', views.upload, name='upload'),
    path('files/<int:file_id>/rename/', views.rename, name='rename'),
    path('files/<int:file_id>/share/', views.share, name='share'),
    path('files/<int:file_id>/delete/', views.delete, name='delete'),
    path('files/<int:file_id>/download/', views.download, name='download'),
    path('<slug:file_type>/', views.file_list, name='list'),
]
