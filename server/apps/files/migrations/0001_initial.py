import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Node',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('kind', models.CharField(choices=[('folder', 'Folder'), ('file', 'File'), ('image', 'Image')], max_length=16)),
                ('is_public', models.BooleanField(default=False, help_text='Readable by anyone, with or without a session')),
                ('payload', models.FileField(blank=True, default='', help_text='Content identifier of the payload in storage', upload_to='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='nodes', to='accounts.user')),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='children', to='files.node')),
            ],
            options={
                'verbose_name': 'Node',
                'verbose_name_plural': 'Nodes',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['owner', 'parent', 'id'], name='files_owner_parent_idx')],
                'constraints': [
                    models.CheckConstraint(
                        condition=(
                            models.Q(kind='folder', payload='') |
                            (~models.Q(kind='folder') & ~models.Q(payload=''))
                        ),
                        name='files_node_payload_iff_not_folder',
                    ),
                ],
            },
        ),
    ]
