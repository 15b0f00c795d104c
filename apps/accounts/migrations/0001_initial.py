from django.conf import settings
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
            name='UserProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated At')),
                ('role', models.CharField(choices=[('FACILITATOR', 'Facilitador'), ('COORDINATOR', 'Coordinador'), ('DIRECTOR', 'Director'), ('SAVER', 'Ahorrador')], db_index=True, default='SAVER', max_length=20)),
                ('country', django_countries.fields.CountryField(default='CO', max_length=2)),
                ('city', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('coordination_zone', models.CharField(blank=True, default='', help_text='Coordinators only: facilitators residing in this city belong to the zone', max_length=100)),
                ('phone', models.CharField(blank=True, default='', max_length=20)),
                ('church', models.CharField(blank=True, default='', max_length=150)),
                ('birth_date', models.DateField(blank=True, null=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'User Profile',
                'verbose_name_plural': 'User Profiles',
                'db_table': 'usuarios',
            },
        ),
    ]
