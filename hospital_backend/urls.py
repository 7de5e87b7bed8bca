"""Hospital records URL configuration.

API routes:
    /api/              - Record counts (surgeries)
    /api/health/       - Health check (core)
    /api/doctors/      - Doctors (doctors)
    /api/patients/     - Patients (patients)
    /api/surgeries/    - Surgeries (surgeries)

HTML:
    /catalog/          - Record pages (catalog)
    /admin/            - Hospital admin site
"""

from django.http import HttpResponse, HttpResponseRedirect
from django.urls import include, path, reverse

from hospital_backend.core.admin import hospital_admin_site


def root(request):
    """Root endpoint.

    - Browsers (Accept: text/html) are redirected to the catalog index.
    - Non-HTML clients get a stable plain-text response (acts like a simple healthcheck).
    """

    accept = request.headers.get('Accept', '')
    if 'text/html' in accept.lower():
        return HttpResponseRedirect(reverse('catalog:index'))

    return HttpResponse('Hospital records backend is running.')


urlpatterns = [
    path('', root, name='root'),
    path('admin/', hospital_admin_site.urls),
    path('catalog/', include('hospital_backend.catalog.urls')),

    path('api/', include('hospital_backend.core.urls')),
    path('api/', include('hospital_backend.surgeries.urls')),
    path('api/', include('hospital_backend.doctors.urls')),
    path('api/', include('hospital_backend.patients.urls')),
]
