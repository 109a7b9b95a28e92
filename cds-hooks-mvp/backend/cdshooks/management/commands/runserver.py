from django.core.management.commands.runserver import Command as RunserverCommand

from cdshooks.conf import hooks_setting


class Command(RunserverCommand):
    """`manage.py runserver` listening on CDS_HOOKS['PORT'] unless an address is given."""

    @property
    def default_port(self):
        return str(hooks_setting('PORT'))
