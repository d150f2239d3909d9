"""Forms validating the file action endpoints."""

import re
from typing import Final

from django import forms

_EMAIL_SEPARATORS: Final = re.compile(r'[\s,;]+')


class UploadForm(forms.Form):
    """Multipart upload of a single file."""

    file = forms.FileField(allow_empty_file=True)


class RenameForm(forms.Form):
    """New display name, with or without the extension."""

    name = forms.CharField(max_length=255, strip=True)


class ShareForm(forms.Form):
    """Complete list of collaborator emails.

    Accepts repeated `emails` fields as well as a single field with
    comma, semicolon or whitespace separated addresses. An empty list
    revokes all access.
    """

    emails = forms.CharField(required=False)

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._raw_emails: list[str] = []
        if self.data:
            self._raw_emails = self.data.getlist('emails')

    def clean_emails(self) -> list[str]:
        emails: list[str] = []
        for raw_value in self._raw_emails:
            emails.extend(
                email
                for email in _EMAIL_SEPARATORS.split(raw_value)
                if email
            )
        return emails
