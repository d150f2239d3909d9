"""Views for the files app.

Pages are rendered on the server. File actions (upload, rename, share,
delete) answer with a JSON status object, so the page can tell
"not permitted" (403) from a bad request (400) and from a system
failure (500, raised as usual).
"""

import logging
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, Final

from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import (
    Http404,
    HttpRequest,
    HttpResponse,
    HttpResponseRedirect,
    JsonResponse,
)
from django.shortcuts import render
from django.views.decorators.http import require_GET, require_POST

from server.apps.files import presentation
from server.apps.files.exceptions import (
    FilePermissionError,
    FileTooLargeError,
    InvalidFileNameError,
    QuotaExceededError,
)
from server.apps.files.forms import RenameForm, ShareForm, UploadForm
from server.apps.files.infrastructure.links import (
    construct_download_url,
    construct_file_url,
)
from server.apps.files.logic import (
    file_operations,
    quota_operations,
    sharing_operations,
)
from server.apps.files.models import File

_RECENT_FILES_LIMIT: Final = 10

logger = logging.getLogger(__name__)

_View = Callable[..., HttpResponse]


def _status(status: str, **payload: Any) -> dict[str, Any]:
    return {'status': status, **payload}


def _error(message: str, status: HTTPStatus) -> JsonResponse:
    return JsonResponse(_status('error', message=message), status=status)


def _form_error(form: Any) -> JsonResponse:
    message = '; '.join(
        f'{field}: {" ".join(errors)}'
        for field, errors in form.errors.items()
    )
    return _error(message, HTTPStatus.BAD_REQUEST)


def file_action(view: _View) -> _View:
    """Translate expected file errors into JSON status responses.

    Anything not listed here propagates and becomes a server error.
    """
    @wraps(view)
    def decorator(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            return view(request, *args, **kwargs)
        except FilePermissionError as exc:
            return _error(str(exc), HTTPStatus.FORBIDDEN)
        except File.DoesNotExist:
            return _error('File not found', HTTPStatus.NOT_FOUND)
        except (
            QuotaExceededError,
            FileTooLargeError,
            InvalidFileNameError,
        ) as exc:
            return _error(str(exc), HTTPStatus.BAD_REQUEST)
        except ValidationError as exc:
            return _error(' '.join(exc.messages), HTTPStatus.BAD_REQUEST)
    return decorator


def serialize_file(file_instance: File) -> dict[str, Any]:
    """JSON representation of a file record.

    Args:
        file_instance: File to serialize.

    Returns:
        Dictionary safe to pass to JsonResponse.
    """
    return {
        'id': file_instance.id,
        'name': file_instance.name,
        'extension': file_instance.extension,
        'category': file_instance.category,
        'size': file_instance.size_bytes,
        'owner': file_instance.user_id,
        'account_id': (
            str(file_instance.account_id)
            if file_instance.account_id else None
        ),
        'users': file_instance.get_shared_emails(),
        'bucket_file_id': file_instance.bucket_file_id,
        'url': construct_file_url(file_instance),
        'created_at': file_instance.created_at.isoformat(),
        'updated_at': file_instance.updated_at.isoformat(),
    }


@login_required
@require_GET
def dashboard(request: HttpRequest) -> HttpResponse:
    """Storage usage overview and the most recent files."""
    total_space = quota_operations.get_total_space_used(request.user)
    recent_files = file_operations.list_files(
        request.user,
        limit=_RECENT_FILES_LIMIT,
    )
    return render(
        request,
        'files/dashboard.html',
        {
            'total_space': total_space,
            'usage_summary': presentation.get_usage_summary(total_space),
            'used_percentage': presentation.calculate_percentage(
                total_space.used,
                total_space.all,
            ),
            'files': recent_files,
        },
    )


@login_required
@require_GET
def file_list(request: HttpRequest, file_type: str) -> HttpResponse:
    """Files of one route type (documents, images, media, others)."""
    if file_type not in presentation.FILE_TYPE_ROUTES:
        raise Http404(f'Unknown file type: {file_type}')

    categories = presentation.get_file_types_params(file_type)
    search_text = request.GET.get('query', '').strip()
    sort = request.GET.get('sort', file_operations.DEFAULT_SORT)

    files = list(file_operations.list_files(
        request.user,
        categories=categories,
        search_text=search_text,
        sort=sort,
    ))
    return render(
        request,
        'files/file_list.html',
        {
            'file_type': file_type,
            'files': files,
            'total_size': sum(
                file_instance.size_bytes for file_instance in files
            ),
            'query': search_text,
            'sort': sort,
        },
    )


@login_required
@require_POST
@file_action
def upload(request: HttpRequest) -> HttpResponse:
    """Upload a file for the signed-in user."""
    form = UploadForm(request.POST, request.FILES)
    if not form.is_valid():
        return _form_error(form)

    uploaded = form.cleaned_data['file']
    file_instance = file_operations.upload_file(
        request.user,
        uploaded,
        filename=uploaded.name,
    )
    return JsonResponse(
        _status('success', file=serialize_file(file_instance)),
        status=HTTPStatus.CREATED,
    )


@login_required
@require_POST
@file_action
def rename(request: HttpRequest, file_id: int) -> HttpResponse:
    """Rename a file the user owns."""
    form = RenameForm(request.POST)
    if not form.is_valid():
        return _form_error(form)

    file_instance = file_operations.rename_file(
        request.user,
        file_id,
        form.cleaned_data['name'],
    )
    return JsonResponse(_status('success', file=serialize_file(file_instance)))


@login_required
@require_POST
@file_action
def share(request: HttpRequest, file_id: int) -> HttpResponse:
    """Replace the collaborators of a file the user owns."""
    form = ShareForm(request.POST)
    if not form.is_valid():
        return _form_error(form)

    file_instance = sharing_operations.update_file_users(
        request.user,
        file_id,
        form.cleaned_data['emails'],
    )
    return JsonResponse(_status('success', file=serialize_file(file_instance)))


@login_required
@require_POST
@file_action
def delete(request: HttpRequest, file_id: int) -> HttpResponse:
    """Delete a file the user owns, record first, then the blob."""
    file_operations.delete_file(request.user, file_id)
    return JsonResponse(_status('success'))


@login_required
@require_GET
def download(request: HttpRequest, file_id: int) -> HttpResponse:
    """Redirect to a download link for a file the user can read."""
    try:
        file_instance = file_operations.get_file(request.user, file_id)
    except File.DoesNotExist as exc:
        raise Http404('File not found') from exc

    logger.info(
        'User %s downloading file %d',
        request.user.username,
        file_id,
    )
    return HttpResponseRedirect(construct_download_url(file_instance))
