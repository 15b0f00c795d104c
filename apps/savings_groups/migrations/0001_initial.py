from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django_countries.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SavingsGroup',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
                ('name', models.CharField(db_index=True, max_length=200, verbose_name='Nombre del grupo')),
                ('savings_type', models.CharField(choices=[('Simple', 'Simple'), ('Rosca', 'Rosca'), ('Asca', 'Asca')], default='Simple', max_length=10, verbose_name='Tipo de ahorro')),
                ('is_youth_group', models.BooleanField(default=False, verbose_name='Grupo juvenil')),
                ('operating_country', django_countries.fields.CountryField(db_index=True, default='CO', max_length=2, verbose_name='País de operación')),
                ('operating_city', models.CharField(max_length=100, verbose_name='Ciudad de operación')),
                ('operating_zone', models.CharField(blank=True, default='', max_length=100, verbose_name='Zona de operación')),
                ('total_members', models.PositiveIntegerField(default=0, verbose_name='Total de miembros')),
                ('men', models.PositiveIntegerField(default=0, verbose_name='Hombres')),
                ('women', models.PositiveIntegerField(default=0, verbose_name='Mujeres')),
                ('boys', models.PositiveIntegerField(default=0, verbose_name='Niños')),
                ('girls', models.PositiveIntegerField(default=0, verbose_name='Niñas')),
                ('creation_year', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(2100)], verbose_name='Año de creación')),
                ('creation_month', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name='Mes de creación')),
                ('cycle_duration_months', models.PositiveSmallIntegerField(default=12, validators=[django.core.validators.MinValueValidator(1)], verbose_name='Duración del ciclo (meses)')),
                ('facilitator', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='savings_groups', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Savings Group',
                'verbose_name_plural': 'Savings Groups',
                'db_table': 'grupos_ahorro',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['facilitator', 'name'], name='grupos_ahor_facilit_6a1f0e_idx'),
                    models.Index(fields=['creation_year', 'creation_month'], name='grupos_ahor_creatio_3b7c2d_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Cycle',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
                ('name', models.CharField(max_length=200, verbose_name='Nombre del ciclo')),
                ('start_date', models.DateField(verbose_name='Fecha de inicio')),
                ('end_date', models.DateField(blank=True, null=True, verbose_name='Fecha de fin')),
                ('status', models.CharField(choices=[('ACTIVE', 'Activo'), ('TERMINATED', 'Terminado')], db_index=True, default='ACTIVE', max_length=12, verbose_name='Estado')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_cycles', to=settings.AUTH_USER_MODEL)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cycles', to='savings_groups.savingsgroup')),
            ],
            options={
                'verbose_name': 'Cycle',
                'verbose_name_plural': 'Cycles',
                'db_table': 'ciclos_ahorro',
                'ordering': ['-id'],
            },
        ),
    ]
