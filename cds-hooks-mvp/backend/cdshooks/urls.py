from django.urls import path

from .catalog import SERVICES
from .views import DiscoveryView, HookServiceView

urlpatterns = [
    path('cds-services', DiscoveryView.as_view(), name='cds-discovery'),
] + [
    # 每个 catalog 里的服务一条 POST 路由；未声明的 id 由 Django 返回 404
    path(f'cds-services/{service.id}', HookServiceView.as_view(),
         {'service_id': service.id}, name=f'cds-service-{service.id}')
    for service in SERVICES
]
