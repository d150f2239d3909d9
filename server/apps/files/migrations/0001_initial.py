import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('account_id', models.UUIDField(blank=True, help_text="Owner's account identifier at upload time", null=True)),
                ('file', models.FileField(help_text='Path in storage: {user_id}/{blob id}/file.ext', max_length=512, upload_to='')),
                ('name', models.CharField(help_text='Display name, always ends with the extension', max_length=255)),
                ('extension', models.CharField(blank=True, help_text='Lowercase extension without dot', max_length=32)),
                ('category', models.CharField(choices=[('document', 'Document'), ('image', 'Image'), ('video', 'Video'), ('audio', 'Audio'), ('other', 'Other')], db_index=True, default='other', max_length=16)),
                ('size_bytes', models.BigIntegerField(help_text='File size in bytes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'category'], name='files_user_category_idx'),
                    models.Index(fields=['user', '-created_at'], name='files_user_recent_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='FileShare',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(db_index=True, max_length=254)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('file', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shares', to='files.file')),
            ],
            options={
                'verbose_name': 'File Share',
                'verbose_name_plural': 'File Shares',
                'ordering': ['id'],
                'constraints': [
                    models.UniqueConstraint(fields=('file', 'email'), name='file_shares_file_email_unique'),
                ],
            },
        ),
    ]
