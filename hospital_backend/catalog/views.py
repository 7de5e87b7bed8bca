"""
Catalog views: server-rendered pages for the hospital records.

Pages:
- index: record counts
- doctors, patients, surgeries: list / detail / create / update / delete

Surgery create and update go through ``surgeries.services.planning``; a
double-booking re-renders the form with the conflict message. Deleting a
doctor or patient that a surgery still references re-renders the delete
page with the blocking surgeries.
"""

import logging

from django.db.models import Prefetch
from django.http import HttpResponseRedirect
from django.shortcuts import get_object_or_404
from django.urls import reverse, reverse_lazy
from django.views.generic import (
    CreateView,
    DeleteView,
    DetailView,
    FormView,
    ListView,
    TemplateView,
    UpdateView,
)

from hospital_backend.core.exceptions import RecordInUseError
from hospital_backend.core.utils import log_action
from hospital_backend.doctors.models import Doctor
from hospital_backend.doctors.services import delete_doctor
from hospital_backend.patients.models import Patient
from hospital_backend.patients.services import delete_patient
from hospital_backend.surgeries.exceptions import InvalidSchedulingData, SchedulingConflictError
from hospital_backend.surgeries.models import Surgery
from hospital_backend.surgeries.repositories import DoctorRepository, SurgeryRepository
from hospital_backend.surgeries.services.planning import (
    delete_surgery,
    list_doctor_choices,
    plan_surgery,
    surgery_form_initial,
    update_surgery,
)
from hospital_backend.surgeries.services.scheduling import parse_doctor_ids

from .forms import DoctorForm, PatientForm, SurgeryFilterForm, SurgeryForm

logger = logging.getLogger(__name__)


class IndexView(TemplateView):
    template_name = 'catalog/index.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(SurgeryRepository.counts())
        context['doctor_count'] = Doctor.objects.count()
        context['patient_count'] = Patient.objects.count()
        return context


# ---------------------------------------------------------------------------
# Shared mixins
# ---------------------------------------------------------------------------

class AuditedFormMixin:
    """Writes an audit entry after a model form saved successfully."""

    audit_object_type = ''
    audit_action = ''

    def form_valid(self, form):
        response = super().form_valid(form)
        log_action(
            f'{self.audit_object_type}_{self.audit_action}',
            self.audit_object_type,
            self.object.id,
            meta={'name': self.object.name},
        )
        return response


class GuardedDeleteView(DeleteView):
    """Delete through a service that may refuse with ``RecordInUseError``."""

    delete_service = None

    def form_valid(self, form):
        success_url = self.get_success_url()
        try:
            type(self).delete_service(self.object)
        except RecordInUseError as e:
            context = self.get_context_data(
                error=str(e),
                blocking_surgeries=Surgery.objects.filter(id__in=e.surgery_ids).order_by('date', 'id'),
            )
            return self.render_to_response(context, status=409)
        return HttpResponseRedirect(success_url)


# ---------------------------------------------------------------------------
# Doctors
# ---------------------------------------------------------------------------

class DoctorListView(ListView):
    model = Doctor
    template_name = 'catalog/doctor_list.html'
    context_object_name = 'doctors'


class DoctorDetailView(DetailView):
    model = Doctor
    template_name = 'catalog/doctor_detail.html'
    context_object_name = 'doctor'

    def get_queryset(self):
        return Doctor.objects.prefetch_related(
            Prefetch('surgeries', queryset=Surgery.objects.select_related('patient').order_by('date', 'id'))
        )


class DoctorCreateView(AuditedFormMixin, CreateView):
    model = Doctor
    form_class = DoctorForm
    template_name = 'catalog/doctor_form.html'
    audit_object_type = 'doctor'
    audit_action = 'create'


class DoctorUpdateView(AuditedFormMixin, UpdateView):
    model = Doctor
    form_class = DoctorForm
    template_name = 'catalog/doctor_form.html'
    audit_object_type = 'doctor'
    audit_action = 'update'


class DoctorDeleteView(GuardedDeleteView):
    model = Doctor
    template_name = 'catalog/doctor_confirm_delete.html'
    context_object_name = 'doctor'
    success_url = reverse_lazy('catalog:doctor_list')
    delete_service = delete_doctor


# ---------------------------------------------------------------------------
# Patients
# ---------------------------------------------------------------------------

class PatientListView(ListView):
    template_name = 'catalog/patient_list.html'
    context_object_name = 'patients'

    def get_queryset(self):
        return Patient.objects.order_by('family_name', 'first_name', 'id')


class PatientDetailView(DetailView):
    model = Patient
    template_name = 'catalog/patient_detail.html'
    context_object_name = 'patient'

    def get_queryset(self):
        return Patient.objects.prefetch_related(
            Prefetch('surgeries', queryset=Surgery.objects.prefetch_related('doctors').order_by('date', 'id'))
        )


class PatientCreateView(AuditedFormMixin, CreateView):
    model = Patient
    form_class = PatientForm
    template_name = 'catalog/patient_form.html'
    audit_object_type = 'patient'
    audit_action = 'create'


class PatientUpdateView(AuditedFormMixin, UpdateView):
    model = Patient
    form_class = PatientForm
    template_name = 'catalog/patient_form.html'
    audit_object_type = 'patient'
    audit_action = 'update'


class PatientDeleteView(GuardedDeleteView):
    model = Patient
    template_name = 'catalog/patient_confirm_delete.html'
    context_object_name = 'patient'
    success_url = reverse_lazy('catalog:patient_list')
    delete_service = delete_patient


# ---------------------------------------------------------------------------
# Surgeries
# ---------------------------------------------------------------------------

class SurgeryListView(ListView):
    """Surgery list with optional date / active / doctor filters."""

    context_object_name = 'surgeries'
    template_name = 'catalog/surgery_list.html'

    def get_filter_form(self):
        if not hasattr(self, '_filter_form'):
            self._filter_form = SurgeryFilterForm(self.request.GET or None)
        return self._filter_form

    def get_queryset(self):
        form = self.get_filter_form()
        if form.is_bound and form.is_valid():
            data = form.cleaned_data
            return SurgeryRepository.search(
                day=data.get('date'),
                active=True if data.get('active') else None,
                doctor_ids=[d.id for d in data.get('doctor') or []],
            )
        return SurgeryRepository.queryset()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['filter_form'] = self.get_filter_form()
        return context


class SurgeryDetailView(DetailView):
    context_object_name = 'surgery'
    template_name = 'catalog/surgery_detail.html'

    def get_queryset(self):
        return SurgeryRepository.queryset()


class SurgeryFormMixin:
    """Shared create/update handling for the surgery form.

    ``available_only`` limits the doctor checkboxes to doctors without an
    active surgery. Subclasses provide ``save_surgery(data)``, which returns
    the saved surgery.
    """

    form_class = SurgeryForm
    template_name = 'catalog/surgery_form.html'
    available_only = False

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['doctors'] = DoctorRepository.find_all()
        return kwargs

    def _selected_doctor_ids(self, form):
        if not form.is_bound:
            return form.initial.get('doctors', [])
        try:
            return parse_doctor_ids(form.data.getlist('doctors'))
        except InvalidSchedulingData:
            return []

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['doctor_choices'] = list_doctor_choices(
            selected_ids=self._selected_doctor_ids(context['form']),
            available_only=self.available_only,
        )
        return context

    def form_valid(self, form):
        try:
            surgery = self.save_surgery(dict(form.cleaned_data))
        except SchedulingConflictError as e:
            form.add_error(None, e.message)
            return self.form_invalid(form)
        except InvalidSchedulingData as e:
            form.add_error(e.field if e.field in form.fields else None, str(e))
            return self.form_invalid(form)
        return HttpResponseRedirect(surgery.get_absolute_url())


class SurgeryCreateView(SurgeryFormMixin, FormView):
    available_only = True

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['is_create'] = True
        return context

    def save_surgery(self, data):
        return plan_surgery(data=data)


class SurgeryUpdateView(SurgeryFormMixin, FormView):

    def dispatch(self, request, *args, **kwargs):
        self.surgery = get_object_or_404(SurgeryRepository.queryset(), pk=kwargs['pk'])
        return super().dispatch(request, *args, **kwargs)

    def get_initial(self):
        return surgery_form_initial(self.surgery)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['surgery'] = self.surgery
        return context

    def save_surgery(self, data):
        return update_surgery(self.surgery, data=data)


class SurgeryDeleteView(DeleteView):
    context_object_name = 'surgery'
    template_name = 'catalog/surgery_confirm_delete.html'

    def get_queryset(self):
        return SurgeryRepository.queryset()

    def get_success_url(self):
        return reverse('catalog:surgery_list')

    def form_valid(self, form):
        success_url = self.get_success_url()
        delete_surgery(self.object)
        return HttpResponseRedirect(success_url)
