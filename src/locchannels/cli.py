"""
Command Line Interface

Prints facet channels for a loc.gov search or for a single loc.gov item.
"""

import click
import requests
from typing import List, Tuple
from tqdm import tqdm
from .config import Config
from .api_client import LocApiClient, LocApiError
from .channels import Channel, FacetsChannelProvider
from .search import LocRecordDriver, LocSearchResults, ResultsManager
from .search.loc import SEARCH_CLASS_ID
from .url import UrlBuilder


def create_provider(config: Config) -> Tuple[LocApiClient, ResultsManager, FacetsChannelProvider]:
    """Wire the loc.gov backend, URL builder and channel provider together."""
    client = LocApiClient(**config.get_api_config())

    def make_results():
        results = LocSearchResults(client)
        results.get_params().set_limit(config.channel_result_limit)
        return results

    manager = ResultsManager()
    manager.register(SEARCH_CLASS_ID, make_results)

    provider = FacetsChannelProvider(manager, UrlBuilder(**config.get_url_config()))
    provider.set_options(config.get_channel_options())
    return client, manager, provider


def echo_channels(channels: List[Channel]):
    if not channels:
        click.echo("No channels found.")
        return

    for channel in channels:
        if not channel:
            click.echo("⚠️  Channel token could not be parsed")
            continue
        click.echo(f"\n📺 {channel.title} ({len(channel.contents)} records)")
        click.echo(f"   Search:   {channel.search_url}")
        click.echo(f"   Channels: {channel.channels_url}")
        for summary in channel.contents:
            click.echo(f"   - {summary.title} [{summary.id}]")


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def cli(verbose):
    """locchannels - Facet channels for Library of Congress searches"""
    config = Config()
    if verbose:
        config.log_level = 'DEBUG'
    config.setup_logging()


@cli.command()
@click.argument('query')
@click.option('--token', help='Load only the channel identified by this token')
def search(query, token):
    """Show channels suggested by the facets of a search."""
    config = Config()
    _, manager, provider = create_provider(config)

    results = manager.get(SEARCH_CLASS_ID)
    params = results.get_params()
    params.set_query(query)
    provider.configure_search_params(params)

    try:
        results.perform_and_process_search()
        channels = provider.get_from_search(results, token)
    except (requests.exceptions.RequestException, LocApiError) as e:
        raise click.ClickException(f"Search failed: {e}")

    click.echo(f"🔍 {results.get_result_total():,} results for '{query}'")
    echo_channels(channels)


@cli.command()
@click.argument('item_id')
@click.option('--token', help='Load only the channel identified by this token')
def record(item_id, token):
    """Show channels built from one item's subjects and contributors."""
    config = Config()
    client, _, provider = create_provider(config)

    try:
        driver = LocRecordDriver.load(client, item_id)
        channels = provider.get_from_record(driver, token)
    except (requests.exceptions.RequestException, LocApiError) as e:
        raise click.ClickException(f"Could not build channels for {item_id}: {e}")

    click.echo(f"📄 {driver.get_title() or item_id}")
    echo_channels(channels)


@cli.command()
@click.argument('id_file', type=click.File('r'))
def records(id_file):
    """Count channels for every item id listed (one per line) in ID_FILE."""
    config = Config()
    client, _, provider = create_provider(config)

    item_ids = [line.strip() for line in id_file if line.strip()]
    counts = []
    failed = 0

    with tqdm(total=len(item_ids), desc="Building channels") as pbar:
        for item_id in item_ids:
            try:
                driver = LocRecordDriver.load(client, item_id)
                counts.append((item_id, len(provider.get_from_record(driver))))
            except (requests.exceptions.RequestException, LocApiError) as e:
                tqdm.write(f"❌ {item_id}: {e}")
                failed += 1
            pbar.update(1)

    for item_id, count in counts:
        click.echo(f"{item_id}: {count} channel(s)")
    if failed:
        click.echo(f"\n⚠️  {failed} item(s) failed")


if __name__ == '__main__':
    cli()
