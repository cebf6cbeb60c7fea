from django import forms
from .models import Milestone

MILESTONE_FIELDS = ['title', 'description', 'due_date', 'status']


class MilestoneForm(forms.ModelForm):
    class Meta:
        model = Milestone
        fields = MILESTONE_FIELDS
