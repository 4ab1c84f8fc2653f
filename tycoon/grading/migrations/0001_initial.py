# pylint: skip-file


from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import model_utils.fields
import simple_history.models


GRADE_BANDS = [('high', 'high'), ('median', 'median'), ('low', 'low'), ('incomplete', 'incomplete')]
GRADE_STATUSES = [('draft', 'draft'), ('approved', 'approved'), ('published', 'published')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('roster', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Grade',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('status', model_utils.fields.StatusField(choices=GRADE_STATUSES, default='draft', max_length=100, no_check_for_status=True, verbose_name='status')),
                ('status_changed', model_utils.fields.MonitorField(default=django.utils.timezone.now, monitor='status', verbose_name='status changed')),
                ('average_investment', models.FloatField(default=0)),
                ('grade', models.CharField(choices=GRADE_BANDS, default='incomplete', max_length=20)),
                ('percentage', models.FloatField(default=0)),
                ('total_investments', models.PositiveIntegerField(default=0)),
                ('admin_notes', models.TextField(blank=True, default='')),
                ('manual_override', models.BooleanField(default=False)),
                ('original_grade', models.CharField(blank=True, choices=GRADE_BANDS, max_length=20, null=True)),
                ('original_percentage', models.FloatField(blank=True, null=True)),
                ('reviewed_by', models.CharField(blank=True, max_length=255, null=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('assignment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='grades', to='roster.assignment')),
                ('submission', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='grades', to='roster.submission')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='grades', to='roster.team')),
            ],
            options={
                'ordering': ['-average_investment', 'id'],
                'unique_together': {('assignment', 'team')},
            },
        ),
        migrations.CreateModel(
            name='HistoricalGrade',
            fields=[
                ('id', models.IntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('status', model_utils.fields.StatusField(choices=GRADE_STATUSES, default='draft', max_length=100, no_check_for_status=True, verbose_name='status')),
                ('status_changed', model_utils.fields.MonitorField(default=django.utils.timezone.now, monitor='status', verbose_name='status changed')),
                ('average_investment', models.FloatField(default=0)),
                ('grade', models.CharField(choices=GRADE_BANDS, default='incomplete', max_length=20)),
                ('percentage', models.FloatField(default=0)),
                ('total_investments', models.PositiveIntegerField(default=0)),
                ('admin_notes', models.TextField(blank=True, default='')),
                ('manual_override', models.BooleanField(default=False)),
                ('original_grade', models.CharField(blank=True, choices=GRADE_BANDS, max_length=20, null=True)),
                ('original_percentage', models.FloatField(blank=True, null=True)),
                ('reviewed_by', models.CharField(blank=True, max_length=255, null=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField()),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('assignment', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='roster.assignment')),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('submission', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='roster.submission')),
                ('team', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='roster.team')),
            ],
            options={
                'verbose_name': 'historical grade',
                'verbose_name_plural': 'historical grades',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name='InterestRecord',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('student_id', models.CharField(db_index=True, max_length=255)),
                ('tokens_invested', models.PositiveSmallIntegerField(default=0)),
                ('performance_tier', models.CharField(choices=GRADE_BANDS, max_length=20)),
                ('interest_earned', models.FloatField(default=0)),
                ('assignment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interest_records', to='roster.assignment')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interest_records', to='roster.team')),
            ],
            options={
                'unique_together': {('student_id', 'assignment', 'team')},
            },
        ),
    ]
