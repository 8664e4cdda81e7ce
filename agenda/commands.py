import click
from agenda.services.sample_data import SampleDataService

def register_commands(app):

    @app.cli.command('seed')
    @click.option('--reset', is_flag=True, help='Delete every record before seeding.')
    def seed(reset):
        """Populate the agenda with sample data."""
        if reset:
            if SampleDataService.reset():
                click.echo('Sample data recreated.')
            else:
                click.echo('Could not recreate sample data; check the log.')
        elif not SampleDataService.is_empty():
            click.echo('Database already contains data; nothing to do.')
        elif SampleDataService.populate():
            click.echo('Sample data created.')
        else:
            click.echo('Could not create sample data; check the log.')
