"""Tests for file operations business logic."""

from io import BytesIO

import pytest
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db import DatabaseError

from server.apps.accounts.logic.account_operations import get_or_create_profile
from server.apps.accounts.models import UserProfile
from server.apps.files.exceptions import (
    FilePermissionError,
    FileTooLargeError,
    InvalidFileNameError,
    QuotaExceededError,
)
from server.apps.files.logic.file_operations import (
    delete_file,
    get_file,
    list_files,
    rename_file,
    upload_file,
)
from server.apps.files.models import File, FileShare


@pytest.mark.django_db
def test_upload_file_success(user, mock_s3, sample_file_content):
    """Test successful file upload (S3 + DB)."""
    file_instance = upload_file(user, sample_file_content)

    assert file_instance.id is not None
    assert file_instance.user == user
    assert file_instance.name == 'report.pdf'
    assert file_instance.extension == 'pdf'
    assert file_instance.category == 'document'
    assert file_instance.size_bytes == len(b'test file content')
    assert file_instance.bucket_file_id.startswith(f'{user.id}/')
    assert file_instance.bucket_file_id.endswith('/report.pdf')
    assert file_instance.get_shared_emails() == []

    assert default_storage.exists(file_instance.bucket_file_id)


@pytest.mark.django_db
def test_upload_then_list_returns_the_record(user, mock_s3):
    """Test upload followed by listing returns exactly that file."""
    content = ContentFile(b'a' * 42, name='holiday.JPG')

    upload_file(user, content)

    files = list(list_files(user))
    assert len(files) == 1
    assert files[0].name == 'holiday.JPG'
    assert files[0].category == 'image'
    assert files[0].extension == 'jpg'
    assert files[0].size_bytes == 42


@pytest.mark.django_db
def test_upload_file_same_name_twice(user, mock_s3):
    """Test two uploads with the same name get separate blobs."""
    first = upload_file(user, ContentFile(b'one', name='notes.txt'))
    second = upload_file(user, ContentFile(b'two', name='notes.txt'))

    assert first.bucket_file_id != second.bucket_file_id
    assert first.name == second.name == 'notes.txt'


@pytest.mark.django_db
def test_upload_file_with_bytesio(user, mock_s3):
    """Test upload with BytesIO object (no .size attribute)."""
    file_instance = upload_file(
        user,
        BytesIO(b'bytesio content here'),
        filename='song.mp3',
    )

    assert file_instance.size_bytes == 20
    assert file_instance.category == 'audio'


@pytest.mark.django_db
def test_upload_file_without_extension(user, mock_s3):
    """Test files without extension are classified as other."""
    file_instance = upload_file(user, ContentFile(b'data', name='Makefile'))

    assert file_instance.category == 'other'
    assert file_instance.extension == ''


@pytest.mark.django_db
def test_upload_file_stores_account_id(user, mock_s3, sample_file_content):
    """Test a user without a profile gets one, and its account id."""
    assert not UserProfile.objects.filter(user=user).exists()

    file_instance = upload_file(user, sample_file_content)

    file_instance.refresh_from_db()
    assert file_instance.account_id is not None
    assert file_instance.account_id == get_or_create_profile(user).account_id


@pytest.mark.django_db
def test_upload_file_keeps_account_id(user, mock_s3):
    """Test every upload carries the same account id."""
    first = upload_file(user, ContentFile(b'one', name='a.txt'))
    second = upload_file(user, ContentFile(b'two', name='b.txt'))

    assert first.account_id == second.account_id
    assert UserProfile.objects.filter(user=user).count() == 1


@pytest.mark.django_db
def test_upload_file_rolls_back_blob_when_record_fails(
    user,
    mock_s3,
    stored_keys,
    sample_file_content,
    monkeypatch,
):
    """Test the stored blob is deleted when the DB record can't be created."""
    def failing_save(*args, **kwargs):
        raise DatabaseError('database is down')

    monkeypatch.setattr(File, 'save', failing_save)

    with pytest.raises(DatabaseError):
        upload_file(user, sample_file_content)

    assert stored_keys() == []


@pytest.mark.django_db
def test_upload_file_raises_quota_exceeded(user, mock_s3, settings):
    """Test upload_file raises QuotaExceededError when over quota."""
    settings.FILES_STORAGE_QUOTA_BYTES = 100
    upload_file(user, ContentFile(b'a' * 90, name='first.txt'))

    with pytest.raises(QuotaExceededError) as exc_info:
        upload_file(user, ContentFile(b'a' * 50, name='second.txt'))

    assert exc_info.value.quota_bytes == 100
    assert exc_info.value.used_bytes == 90
    assert exc_info.value.required_bytes == 50
    assert File.objects.count() == 1


@pytest.mark.django_db
def test_upload_file_raises_too_large(user, mock_s3, stored_keys, settings):
    """Test uploads over the size limit never reach storage."""
    settings.FILES_MAX_UPLOAD_BYTES = 10

    with pytest.raises(FileTooLargeError):
        upload_file(user, ContentFile(b'a' * 11, name='big.bin'))

    assert File.objects.count() == 0
    assert stored_keys() == []


@pytest.mark.django_db
def test_upload_file_without_name(user, mock_s3):
    """Test uploads need a filename."""
    with pytest.raises(InvalidFileNameError):
        upload_file(user, BytesIO(b'data'))


@pytest.mark.django_db
def test_list_files_user_isolation(user, other_user, make_file):
    """Test list_files only returns the user's files."""
    own = make_file(user, name='mine.txt')
    make_file(other_user, name='theirs.txt')

    files = list(list_files(user))

    assert files == [own]


@pytest.mark.django_db
def test_list_files_includes_shared(user, other_user, make_file):
    """Test files shared with the user's email are listed."""
    shared = make_file(other_user, name='shared.txt')
    FileShare.objects.create(file=shared, email='TEST@example.com')

    files = list(list_files(user))

    assert files == [shared]


@pytest.mark.django_db
def test_list_files_without_duplicates(user, make_file):
    """Test an owned file that is also shared with the owner appears once."""
    own = make_file(user, name='mine.txt')
    FileShare.objects.create(file=own, email=user.email)

    assert list(list_files(user)) == [own]


@pytest.mark.django_db
def test_list_files_category_filter(user, make_file):
    """Test category filter never returns other categories."""
    make_file(user, name='report.pdf', category='document')
    image = make_file(user, name='photo.png', category='image')

    files = list(list_files(user, categories=['image']))

    assert files == [image]


@pytest.mark.django_db
def test_list_files_multiple_categories(user, make_file):
    """Test media pages combine video and audio."""
    make_file(user, name='report.pdf', category='document')
    video = make_file(user, name='clip.mp4', category='video')
    audio = make_file(user, name='song.mp3', category='audio')

    files = set(list_files(user, categories=['video', 'audio']))

    assert files == {video, audio}


@pytest.mark.django_db
def test_list_files_search(user, make_file):
    """Test search is a case-insensitive substring match on the name."""
    match = make_file(user, name='Quarterly Report.pdf')
    make_file(user, name='photo.png', category='image')

    files = list(list_files(user, search_text='report'))

    assert files == [match]


@pytest.mark.django_db
def test_list_files_sort_by_name(user, make_file):
    """Test sorting by name ascending and descending."""
    beta = make_file(user, name='beta.txt')
    alpha = make_file(user, name='alpha.txt')

    assert list(list_files(user, sort='name-asc')) == [alpha, beta]
    assert list(list_files(user, sort='name-desc')) == [beta, alpha]


@pytest.mark.django_db
def test_list_files_sort_by_size(user, make_file):
    """Test sorting by size."""
    small = make_file(user, name='small.txt', size_bytes=10)
    large = make_file(user, name='large.txt', size_bytes=1000)

    assert list(list_files(user, sort='size-desc')) == [large, small]


@pytest.mark.django_db
def test_list_files_default_sort_newest_first(user, make_file):
    """Test default and legacy sort keys return newest files first."""
    older = make_file(user, name='older.txt')
    newer = make_file(user, name='newer.txt')

    assert list(list_files(user)) == [newer, older]
    assert list(list_files(user, sort='$createdAt-desc')) == [newer, older]
    assert list(list_files(user, sort='$createdAt-asc')) == [older, newer]


@pytest.mark.django_db
def test_list_files_unknown_sort_falls_back(user, make_file):
    """Test unknown sort keys don't reach the ORM."""
    older = make_file(user, name='older.txt')
    newer = make_file(user, name='newer.txt')

    assert list(list_files(user, sort='password-asc')) == [newer, older]
    assert list(list_files(user, sort='name')) == [newer, older]


@pytest.mark.django_db
def test_list_files_limit(user, make_file):
    """Test the result count limit."""
    for index in range(5):
        make_file(user, name=f'file{index}.txt')

    assert len(list(list_files(user, limit=3))) == 3


@pytest.mark.django_db
def test_get_file_for_collaborator(user, other_user, make_file):
    """Test collaborators can read a shared file."""
    shared = make_file(other_user, name='shared.txt')
    FileShare.objects.create(file=shared, email=user.email)

    assert get_file(user, shared.id) == shared


@pytest.mark.django_db
def test_get_file_for_stranger(user, other_user, make_file):
    """Test files that aren't shared look like they don't exist."""
    private = make_file(other_user, name='private.txt')

    with pytest.raises(File.DoesNotExist):
        get_file(user, private.id)


@pytest.mark.django_db
def test_rename_file_appends_extension(user, make_file):
    """Test renaming without the extension keeps the extension."""
    file_instance = make_file(user, name='old.pdf')

    renamed = rename_file(user, file_instance.id, 'report')

    assert renamed.name == 'report.pdf'
    file_instance.refresh_from_db()
    assert file_instance.name == 'report.pdf'


@pytest.mark.django_db
def test_rename_file_keeps_existing_extension(user, make_file):
    """Test renaming with the extension doesn't duplicate it."""
    file_instance = make_file(user, name='old.pdf')

    assert rename_file(user, file_instance.id, 'report.pdf').name == (
        'report.pdf'
    )
    assert rename_file(user, file_instance.id, 'REPORT.PDF').name == (
        'REPORT.PDF'
    )


@pytest.mark.django_db
def test_rename_file_keeps_blob(user, make_file):
    """Test renaming only changes the display name."""
    file_instance = make_file(user, name='old.pdf')
    blob = file_instance.bucket_file_id

    rename_file(user, file_instance.id, 'new')

    file_instance.refresh_from_db()
    assert file_instance.bucket_file_id == blob
    assert file_instance.category == 'document'


@pytest.mark.django_db
def test_rename_file_not_owner(user, other_user, make_file):
    """Test non-owners can't rename, even when the file is shared."""
    file_instance = make_file(other_user, name='old.pdf')
    FileShare.objects.create(file=file_instance, email=user.email)

    with pytest.raises(FilePermissionError):
        rename_file(user, file_instance.id, 'hijacked')

    file_instance.refresh_from_db()
    assert file_instance.name == 'old.pdf'


@pytest.mark.django_db
def test_rename_file_empty_name(user, make_file):
    """Test empty names are rejected."""
    file_instance = make_file(user, name='old.pdf')

    with pytest.raises(InvalidFileNameError):
        rename_file(user, file_instance.id, '   ')


@pytest.mark.django_db
def test_rename_file_not_found(user):
    """Test renaming non-existent file."""
    with pytest.raises(File.DoesNotExist):
        rename_file(user, 99999, 'new')


@pytest.mark.django_db
def test_delete_file_success(user, mock_s3, stored_keys, sample_file_content):
    """Test successful file deletion (DB + S3)."""
    file_instance = upload_file(user, sample_file_content)
    file_id = file_instance.id

    delete_file(user, file_id)

    assert not File.objects.filter(id=file_id).exists()
    assert stored_keys() == []


@pytest.mark.django_db
def test_delete_file_removes_shares(user, mock_s3, sample_file_content):
    """Test deleting a file drops its collaborator list."""
    file_instance = upload_file(user, sample_file_content)
    FileShare.objects.create(file=file_instance, email='friend@example.com')

    delete_file(user, file_instance.id)

    assert FileShare.objects.count() == 0


@pytest.mark.django_db
def test_delete_file_not_owner(
    user,
    other_user,
    mock_s3,
    stored_keys,
    sample_file_content,
):
    """Test non-owners can't delete; record and blob stay."""
    file_instance = upload_file(other_user, sample_file_content)

    with pytest.raises(FilePermissionError):
        delete_file(user, file_instance.id)

    assert File.objects.filter(id=file_instance.id).exists()
    assert stored_keys() == [file_instance.bucket_file_id]


@pytest.mark.django_db
def test_delete_file_keeps_blob_when_record_fails(
    user,
    mock_s3,
    stored_keys,
    sample_file_content,
    monkeypatch,
):
    """Test the blob is never deleted if the DB delete fails."""
    file_instance = upload_file(user, sample_file_content)

    def failing_delete(*args, **kwargs):
        raise DatabaseError('database is down')

    monkeypatch.setattr(File, 'delete', failing_delete)

    with pytest.raises(DatabaseError):
        delete_file(user, file_instance.id)

    assert stored_keys() == [file_instance.bucket_file_id]


@pytest.mark.django_db
def test_delete_file_not_found(user):
    """Test deleting non-existent file."""
    with pytest.raises(File.DoesNotExist):
        delete_file(user, 99999)


@pytest.mark.django_db
def test_delete_file_storage_failure_propagates(
    user,
    mock_s3,
    sample_file_content,
    monkeypatch,
):
    """Test a failing blob delete propagates once the record is gone."""
    file_instance = upload_file(user, sample_file_content)

    def failing_delete(name):
        raise OSError('storage is down')

    monkeypatch.setattr(default_storage, 'delete', failing_delete)

    with pytest.raises(OSError, match='storage is down'):
        delete_file(user, file_instance.id)

    assert not File.objects.filter(id=file_instance.id).exists()


@pytest.mark.django_db
def test_upload_file_name_too_long(user, mock_s3, stored_keys):
    """Test names longer than the name column are rejected up front."""
    long_name = f'{"a" * 252}.txt'

    with pytest.raises(InvalidFileNameError, match='too long'):
        upload_file(user, ContentFile(b'data', name=long_name))

    assert File.objects.count() == 0
    assert stored_keys() == []


@pytest.mark.django_db
def test_upload_file_name_at_limit(user, mock_s3):
    """Test a name exactly as long as the column allows."""
    name = f'{"a" * 251}.txt'

    file_instance = upload_file(user, ContentFile(b'data', name=name))

    assert file_instance.name == name


@pytest.mark.django_db
def test_rename_file_name_too_long_with_extension(user, make_file):
    """Test the appended extension counts towards the length limit."""
    file_instance = make_file(user, name='old.pdf')

    with pytest.raises(InvalidFileNameError, match='too long'):
        rename_file(user, file_instance.id, 'a' * 255)

    file_instance.refresh_from_db()
    assert file_instance.name == 'old.pdf'


@pytest.mark.django_db
def test_rename_file_name_at_limit(user, make_file):
    """Test a rename that ends exactly at the length limit."""
    file_instance = make_file(user, name='old.pdf')

    renamed = rename_file(user, file_instance.id, 'a' * 251)

    assert renamed.name == f'{"a" * 251}.pdf'
