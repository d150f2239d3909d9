"""
Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.

It is also a good practice to keep a single URL to the root index page.

Accounts routes come before files routes, because the files app owns
the catch-all `/<type>/` listing route.
"""

from django.contrib import admin
from django.urls import include, path

from server.apps.accounts import urls as accounts_urls
from server.apps.files import urls as files_urls

urlpatterns = [
    # django-admin:
    path('admin/', admin.site.urls),

    # Apps:
    path('', include(accounts_urls, namespace='accounts')),
    path('', include(files_urls, namespace='files')),
]
