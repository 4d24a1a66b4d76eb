from django import forms

from .models import Announcement


class AnnouncementForm(forms.ModelForm):
    class Meta:
        model = Announcement
        fields = ['title', 'content', 'type', 'status']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Omitted type/status fall back to the model defaults (GENERAL, DRAFT)
        for name in ('type', 'status'):
            if name in self.fields:
                self.fields[name].required = False

    def clean_title(self):
        title = self.cleaned_data['title'].strip()
        if not title:
            raise forms.ValidationError("Title is required.")
        return title


class AnnouncementUpdateForm(AnnouncementForm):
    """Partial update: only the submitted fields are validated and changed."""

    def __init__(self, data=None, *args, **kwargs):
        super().__init__(data, *args, **kwargs)
        if data is not None:
            for name in list(self.fields):
                if name not in data:
                    del self.fields[name]


def form_error_message(form):
    """First error of a bound form as ``field: message``."""
    for field, errors in form.errors.items():
        label = field if field != '__all__' else 'form'
        return f"{label}: {errors[0]}"
    return ''
