from django import forms
from django.conf import settings
from django.template.defaultfilters import filesizeformat


class FileUploadForm(forms.Form):
    project = forms.IntegerField()
    name = forms.CharField(max_length=255, required=False)
    file = forms.FileField()

    def clean_file(self):
        upload = self.cleaned_data['file']
        if upload.size > settings.MAX_UPLOAD_SIZE:
            raise forms.ValidationError(
                f"File too large. Maximum size is {filesizeformat(settings.MAX_UPLOAD_SIZE)}"
            )
        return upload

    def clean_name(self):
        return self.cleaned_data.get('name', '').strip()
