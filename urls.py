from django.contrib import admin
from django.urls import include, path, re_path

import tycoon.api.urls

urlpatterns = [
    # Django built-in
    re_path(r'^admin/', admin.site.urls),

    # Startup Tycoon API
    path('api/', include(tycoon.api.urls)),
]
