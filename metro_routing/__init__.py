import itertools as it, operator as op, functools as ft
from pathlib import Path
import time

from . import engine, fare, network, vis, cache, utils as u, types as t


def calc_timer(func, *args, log=u.get_logger('metro.timer'), timer_name=None, **kws):
	if not timer_name:
		func_base = func if not isinstance(func, ft.partial) else func.func
		timer_name = '.'.join([func_base.__module__.strip('__'), func_base.__qualname__])
	log.debug('[{}] Starting...', timer_name)
	td = time.monotonic()
	data = func(*args, **kws)
	td = time.monotonic() - td
	log.debug('[{}] Finished in: {:.4f}s', timer_name, td)
	return data


def init_router( network_path=None, conf=None,
		conf_engine=None, conf_fare=None, timer_func=None, log=u.get_logger('metro.init') ):
	'''Load network from YAML file (or use built-in reference network, if path is not specified)
		and return (network, router) tuple for it.'''
	if not conf: conf = network.NetworkConf()
	if network_path: graph = network.parse_network(Path(network_path), conf)
	else: graph = network.reference_network(conf)
	log.debug( 'Loaded network: stations={:,}, edges={:,}',
		len(graph), graph.stat_edge_count() )
	router = engine.MetroRoutingEngine(
		graph, conf=conf_engine, conf_fare=conf_fare, timer_func=timer_func )
	return graph, router
