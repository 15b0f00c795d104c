"""Shared fixtures: one user per role and a small savings-group world."""

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.core.cache import cache

from accounts.models import UserProfile
from savings_groups.models import SavingsGroup, Cycle
from reports.models import MonthlyReport

PASSWORD = 'ClaveSegura2024!'


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email, role=UserProfile.SAVER, country='CO', city='', zone='', first_name='', last_name=''):
        user = User.objects.create_user(
            username=email,
            email=email,
            password=PASSWORD,
            first_name=first_name,
            last_name=last_name,
        )
        profile = user.profile
        profile.role = role
        profile.country = country
        profile.city = city
        profile.coordination_zone = zone
        profile.save()
        return user

    return _make_user


@pytest.fixture
def facilitator(make_user):
    return make_user('facilitadora@example.com', UserProfile.FACILITATOR, city='Barranquilla',
                     first_name='Ana', last_name='Pérez')


@pytest.fixture
def other_facilitator(make_user):
    return make_user('facilitador.arauca@example.com', UserProfile.FACILITATOR, city='Arauca',
                     first_name='Luis', last_name='Gómez')


@pytest.fixture
def venezuelan_facilitator(make_user):
    return make_user('facilitador.ve@example.com', UserProfile.FACILITATOR, country='VE', city='Maracaibo',
                     first_name='Rosa', last_name='Díaz')


@pytest.fixture
def coordinator(make_user):
    return make_user('coordinador@example.com', UserProfile.COORDINATOR, city='Barranquilla', zone='Barranquilla',
                     first_name='Carlos', last_name='Ruiz')


@pytest.fixture
def director(make_user):
    return make_user('directora@example.com', UserProfile.DIRECTOR, city='Barranquilla',
                     first_name='Marta', last_name='López')


@pytest.fixture
def saver(make_user):
    return make_user('ahorrador@example.com', first_name='Pedro', last_name='Castro')


@pytest.fixture
def make_group(db):
    def _make_group(facilitator, name='Grupo Esperanza', **kwargs):
        defaults = {
            'savings_type': SavingsGroup.SIMPLE,
            'operating_country': facilitator.profile.country,
            'operating_city': facilitator.profile.city or 'Barranquilla',
            'men': 4,
            'women': 6,
            'creation_year': 2023,
            'creation_month': 1,
        }
        defaults.update(kwargs)
        group = SavingsGroup(name=name, facilitator=facilitator, **defaults)
        group.total_members = defaults.get('total_members', group.demographic_total)
        group.save()
        return group

    return _make_group


@pytest.fixture
def group(make_group, facilitator):
    return make_group(facilitator)


@pytest.fixture
def active_cycle(group, facilitator):
    return Cycle.objects.create(
        group=group,
        name='Ciclo 2024',
        start_date=date(2024, 1, 15),
        status=Cycle.ACTIVE,
        created_by=facilitator,
    )


@pytest.fixture
def make_report(db):
    def _make_report(group, year=2024, month=3, amount='100.00', **kwargs):
        return MonthlyReport.objects.create(
            group=group,
            facilitator=group.facilitator,
            year=year,
            month=month,
            amount_saved=Decimal(amount),
            **kwargs
        )

    return _make_report
