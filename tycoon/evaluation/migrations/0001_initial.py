# pylint: skip-file


from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import model_utils.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('roster', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='EvaluationDistribution',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('evaluations_per_student', models.PositiveSmallIntegerField()),
                ('distributed_by', models.CharField(blank=True, max_length=255, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('assignment', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='distribution', to='roster.assignment')),
            ],
        ),
        migrations.CreateModel(
            name='EvaluationAssignment',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('status', model_utils.fields.StatusField(choices=[('assigned', 'assigned'), ('completed', 'completed')], default='assigned', max_length=100, no_check_for_status=True, verbose_name='status')),
                ('status_changed', model_utils.fields.MonitorField(default=django.utils.timezone.now, monitor='status', verbose_name='status changed')),
                ('evaluator_id', models.CharField(db_index=True, max_length=255)),
                ('due_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('assignment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='evaluations', to='roster.assignment')),
                ('evaluated_team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='evaluations_received', to='roster.team')),
                ('submission', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='evaluations', to='roster.submission')),
            ],
            options={
                'ordering': ['assignment', 'evaluator_id', 'id'],
                'unique_together': {('assignment', 'evaluator_id', 'evaluated_team')},
            },
        ),
        migrations.CreateModel(
            name='Investment',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created', model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name='created')),
                ('modified', model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name='modified')),
                ('investor_id', models.CharField(db_index=True, max_length=255)),
                ('tokens', models.PositiveSmallIntegerField()),
                ('rank', models.PositiveSmallIntegerField(default=1)),
                ('assignment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='investments', to='roster.assignment')),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='investments_received', to='roster.team')),
            ],
            options={
                'ordering': ['assignment', 'investor_id', 'rank'],
                'unique_together': {('assignment', 'investor_id', 'team')},
            },
        ),
    ]
