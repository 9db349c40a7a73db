from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='Block',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('body', models.TextField(blank=True, default='', help_text='HTML content rendered by the core handler.')),
                ('handler', models.CharField(default='core', help_text='Namespace of the handler that renders this block.', max_length=100)),
                ('status', models.BooleanField(default=True, help_text='Only enabled blocks are rendered.')),
                ('visibility', models.CharField(choices=[('exclude', 'All pages except those listed'), ('include', 'Only the listed pages'), ('custom', 'Custom predicate')], default='exclude', max_length=10)),
                ('pages', models.TextField(blank=True, default='', help_text="One path per line, '*' is a wildcard and '/' is the front page. For custom visibility, the name of a registered predicate.")),
                ('locale', models.JSONField(blank=True, default=list)),
                ('settings', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('roles', models.ManyToManyField(blank=True, help_text='Restrict the block to these roles; leave empty for everyone.', related_name='blocks', to='auth.group')),
            ],
            options={
                'ordering': ('title', 'id'),
            },
        ),
        migrations.CreateModel(
            name='BlockRegion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('theme', models.CharField(max_length=100)),
                ('region', models.CharField(max_length=100)),
                ('ordering', models.IntegerField(default=0)),
                ('block', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='regions', to='blocks.block')),
            ],
            options={
                'ordering': ('theme', 'region', 'ordering', 'id'),
                'indexes': [models.Index(fields=['theme', 'region'], name='block_region_lookup_idx')],
            },
        ),
        migrations.AddConstraint(
            model_name='blockregion',
            constraint=models.UniqueConstraint(fields=('block', 'theme', 'region'), name='unique_block_theme_region'),
        ),
    ]
