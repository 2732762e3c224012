import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(db_index=True, max_length=10, unique=True)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('owner_id', models.CharField(db_index=True, max_length=64)),
                ('is_active', models.BooleanField(default=True)),
                ('is_archived', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'projects',
                'ordering': ['-updated_at'],
            },
        ),
        migrations.CreateModel(
            name='Status',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=50, unique=True)),
                ('color', models.CharField(blank=True, default='', max_length=20)),
                ('order_index', models.IntegerField(default=0)),
                ('is_default_for_new', models.BooleanField(default=False)),
                ('is_completed_status', models.BooleanField(default=False)),
                ('is_cancelled_status', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'statuses',
                'ordering': ['order_index', 'id'],
                'verbose_name_plural': 'statuses',
            },
        ),
        migrations.CreateModel(
            name='Board',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('project', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='board', to='planning.project')),
            ],
            options={
                'db_table': 'boards',
            },
        ),
        migrations.CreateModel(
            name='BoardColumn',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_index', models.IntegerField(default=0)),
                ('wip_limit', models.PositiveIntegerField(blank=True, null=True)),
                ('is_collapsed', models.BooleanField(default=False)),
                ('board', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='columns', to='planning.board')),
                ('status', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='board_columns', to='planning.status')),
            ],
            options={
                'db_table': 'board_columns',
                'ordering': ['order_index', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Epic',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(db_index=True, max_length=50, unique=True)),
                ('summary', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('assignee_id', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('priority', models.PositiveSmallIntegerField(default=3, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('start_date', models.DateField(blank=True, null=True)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='epics', to='planning.project')),
                ('status', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='epics', to='planning.status')),
            ],
            options={
                'db_table': 'epics',
                'ordering': ['-updated_at'],
            },
        ),
        migrations.CreateModel(
            name='KeySequence',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('EPIC', 'Epic'), ('WORK_ITEM', 'Work item')], max_length=10)),
                ('last_value', models.PositiveIntegerField(default=0)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='key_sequences', to='planning.project')),
            ],
            options={
                'db_table': 'key_sequences',
            },
        ),
        migrations.CreateModel(
            name='StatusTransition',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_allowed', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('from_status', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transitions_from', to='planning.status')),
                ('to_status', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transitions_to', to='planning.status')),
            ],
            options={
                'db_table': 'status_transitions',
                'ordering': ['from_status_id', 'to_status_id'],
            },
        ),
        migrations.CreateModel(
            name='WorkItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(db_index=True, max_length=50, unique=True)),
                ('item_type', models.CharField(choices=[('TASK', 'Task'), ('BUG', 'Bug'), ('SUBTASK', 'Subtask')], max_length=10)),
                ('summary', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('assignee_id', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('reporter_id', models.CharField(db_index=True, max_length=64)),
                ('priority', models.PositiveSmallIntegerField(choices=[(1, 'Highest'), (2, 'High'), (3, 'Medium'), (4, 'Low'), (5, 'Lowest')], default=3)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('order_index', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('epic', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='work_items', to='planning.epic')),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='children', to='planning.workitem')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='work_items', to='planning.project')),
                ('status', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='work_items', to='planning.status')),
            ],
            options={
                'db_table': 'work_items',
                'ordering': ['-updated_at'],
            },
        ),
        migrations.AddIndex(
            model_name='epic',
            index=models.Index(fields=['project', 'status'], name='epics_project_status_idx'),
        ),
        migrations.AddConstraint(
            model_name='keysequence',
            constraint=models.UniqueConstraint(fields=('project', 'kind'), name='uniq_key_sequence_project_kind'),
        ),
        migrations.AddConstraint(
            model_name='statustransition',
            constraint=models.UniqueConstraint(fields=('from_status', 'to_status'), name='uniq_status_transition_pair'),
        ),
        migrations.AddConstraint(
            model_name='boardcolumn',
            constraint=models.UniqueConstraint(fields=('board', 'status'), name='uniq_board_column_status'),
        ),
        migrations.AddIndex(
            model_name='workitem',
            index=models.Index(fields=['project', 'status'], name='work_items_project_status_idx'),
        ),
        migrations.AddIndex(
            model_name='workitem',
            index=models.Index(fields=['project', 'order_index'], name='work_items_project_order_idx'),
        ),
    ]
