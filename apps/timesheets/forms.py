from django import forms
from .models import Timesheet

TIMESHEET_FIELDS = ['date', 'hours', 'description', 'billable']


class TimesheetForm(forms.ModelForm):
    # Projekt i zadanie sprawdza widok (404 zamiast błędu walidacji)
    class Meta:
        model = Timesheet
        fields = TIMESHEET_FIELDS
