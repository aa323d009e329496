"""Command line interface for running the cell resampler on toy
samples."""

import logging

import click
import numpy as np
from eliot import FileDestination, add_destinations, remove_destination
from tabulate import tabulate

from cellres.configuration import Configuration
from cellres.resampling.neighbours.search import NeighbourSearch
from cellres.resampling.redistribution import Redistribution
from cellres.resampling.resamplers.cell import CellResampler
from cellres.seeds import SeedStrategy
from cellres.toys import dijet_events, gen_toy_events


def set_loglevel(loglevel):
    """Set the level of the root logger.

    Parameters
    ----------
    loglevel : str
        Either an integer level or the name of a level.

    """

    # try to cast the loglevel as an integer. If that fails interpret
    # it as a string.
    try:
        loglevel_num = int(loglevel)
    except ValueError:
        loglevel_num = getattr(logging, loglevel.upper(), None)

    # if no such log level exists in logging the string was invalid
    if not isinstance(loglevel_num, int):
        raise ValueError("invalid log level given")

    logging.basicConfig(level=loglevel_num)


def sample_summary(weights):
    """Sum and number of negative entries of the primary weights."""

    primary = weights[:, 0]
    return float(primary.sum()), int(np.count_nonzero(primary < 0))


@click.group()
@click.pass_context
@click.option('--log', default="WARNING")
@click.option('--eliot-log', default=None, type=click.Path(writable=True, dir_okay=False),
              help="Write structured eliot logs to this file.")
def cli(ctx, log, eliot_log):
    """Cell resampling of collision events with negative weights."""

    try:
        set_loglevel(log)
    except ValueError as err:
        raise click.BadParameter(str(err), param_hint="'--log'")

    if eliot_log is not None:
        eliot_file = open(eliot_log, 'ab')
        destination = FileDestination(file=eliot_file)
        add_destinations(destination)

        def release_eliot_log():
            remove_destination(destination)
            eliot_file.close()

        ctx.call_on_close(release_eliot_log)


@cli.command()
@click.option('--search', type=click.Choice([algo.value for algo in NeighbourSearch]),
              default=Configuration.DEFAULT_NEIGHBOUR_SEARCH.value)
def example(search):
    """Resample the two events of the dijet example."""

    config = Configuration(neighbour_search=search)

    with CellResampler(config, capacity=2) as resampler:

        for event in dijet_events():
            resampler.push(event)

        resampler.resample(0, max_dist=None)

        # results come out in reverse order
        rows = []
        event_idx = resampler.len_remaining() - 1
        weights = resampler.take_next_result()
        while weights is not None:
            rows.append((event_idx, weights[0]))
            event_idx -= 1
            weights = resampler.take_next_result()

    click.echo(tabulate(rows, headers=('event', 'weight')))


@cli.command()
@click.option('--n-events', default=1000, type=click.IntRange(min=1))
@click.option('--n-particles', default=2, type=click.IntRange(min=0))
@click.option('--neg-frac', default=0.2, type=click.FloatRange(0.0, 1.0))
@click.option('--max-dist', default=None, type=click.FloatRange(min=0.0),
              help="Maximal cell radius, unlimited if not given.")
@click.option('--search', type=click.Choice([algo.value for algo in NeighbourSearch]),
              default=Configuration.DEFAULT_NEIGHBOUR_SEARCH.value)
@click.option('--pt-weight', default=Configuration.DEFAULT_PT_WEIGHT,
              type=click.FloatRange(min=0.0))
@click.option('--strategy', type=click.Choice([strategy.value for strategy in SeedStrategy]),
              default=SeedStrategy.NEXT.value)
@click.option('--redistribution', type=click.Choice([rule.value for rule in Redistribution]),
              default=Configuration.DEFAULT_REDISTRIBUTION.value)
@click.option('--seed', default=None, type=click.INT,
              help="Seed for generating the sample.")
def toy(n_events, n_particles, neg_frac, max_dist, search, pt_weight,
        strategy, redistribution, seed):
    """Resample a random toy sample and summarize the result."""

    config = Configuration(neighbour_search=search,
                           pt_weight=pt_weight,
                           redistribution=redistribution)

    events = gen_toy_events(n_events, n_particles=n_particles,
                            neg_frac=neg_frac, seed=seed)

    with CellResampler(config, capacity=n_events) as resampler:

        for event in events:
            resampler.push(event)

        sum_before, neg_before = sample_summary(resampler.store.weights)

        cells = resampler.resample_all(max_dist=max_dist, strategy=strategy)

        sum_after, neg_after = sample_summary(resampler.store.weights)

    cell_sizes = [cell.n_members for cell in cells]
    cell_radii = [cell.radius for cell in cells]

    rows = [
        ('events', n_events),
        ('sum of weights before', sum_before),
        ('sum of weights after', sum_after),
        ('negative weights before', neg_before),
        ('negative weights after', neg_after),
        ('cells', len(cells)),
        ('mean cell size', np.mean(cell_sizes) if len(cells) > 0 else 0.0),
        ('max cell radius', max(cell_radii) if len(cells) > 0 else 0.0),
    ]

    click.echo(tabulate(rows, headers=('quantity', 'value')))


if __name__ == "__main__":

    cli()
