import itertools as it, operator as op, functools as ft
from pathlib import Path

import yaml

from . import utils as u, types as t


log = u.get_logger('metro.network')


@u.attr_struct(vals_to_attrs=True)
class NetworkConf:
	# Station names are stored and looked up in normalized form,
	#  so that callers can match user input case-insensitively via normalize_name().
	name_case = 'upper' # upper, lower or None to keep names as-is


# Reference network - 22 stations of Delhi metro lines, with distances in km
reference_stations = [
	'CENTRAL SECRETARIAT', 'PATEL CHOWK', 'RAJIV CHOWK', 'MANDI HOUSE',
	'SUPREME COURT', 'INDRAPRASTHA', 'YAMUNA BANK', 'AKSHARDHAM',
	'MAYUR VIHAR', 'NIZAMUDDIN', 'ASHRAM', 'VINOBAPURI', 'LAJPAT NAGAR',
	'SOUTH EXTENTION', 'DILLI HAAT', 'JOR BAGH', 'LOK KALYAN MARG',
	'UDYOG BHAWAN', 'KHAN MARKET', 'JLN STADIUM', 'JANGPURA', 'JANPATH' ]

reference_edges = [
	(0, 1, 2), (0, 21, 1), (0, 17, 2), (0, 18, 4), (1, 2, 2), (2, 3, 4),
	(3, 4, 2), (3, 21, 3), (4, 5, 2), (5, 6, 3), (6, 7, 3), (7, 8, 3),
	(8, 9, 5), (9, 10, 3), (10, 11, 3), (11, 12, 3), (12, 13, 3), (12, 20, 3),
	(13, 14, 2), (14, 15, 2), (15, 16, 2), (16, 17, 2), (18, 19, 3), (19, 20, 2) ]


def normalize_name(name, conf=None):
	conf = conf or NetworkConf()
	name = ' '.join(str(name).split())
	if conf.name_case == 'upper': name = name.upper()
	elif conf.name_case == 'lower': name = name.lower()
	elif conf.name_case: raise ValueError('Unknown name_case value: {!r}'.format(conf.name_case))
	return name


def build_network(stations, edges, conf=None):
	'''Build sealed Network from station names and (a, b, weight) edges.
		Stations can be either a list of names (with index as id) or an {id: name} mapping.
		Edge endpoints can be either station names or ids.'''
	conf = conf or NetworkConf()
	if isinstance(stations, dict): station_items = list(stations.items())
	elif isinstance(stations, (list, tuple)): station_items = list(enumerate(stations))
	else: raise t.public.NetworkError(
		'Stations must be a list of names or an {id: name} mapping: {!r}'.format(stations) )
	if not isinstance(edges, (list, tuple)):
		raise t.public.NetworkError('Edges must be a list of [a, b, weight]: {!r}'.format(edges))
	for station_id, name in station_items:
		if not isinstance(name, str) or not name.strip():
			raise t.public.NetworkError('Station name must be a non-empty string: {!r}'.format(name))
		if not isinstance(station_id, int) or isinstance(station_id, bool):
			raise t.public.NetworkError('Station id must be an integer: {!r}'.format(station_id))
		if not (0 <= station_id < len(station_items)):
			raise t.public.NetworkError( 'Station id out of dense'
				' 0..{} range: {!r}'.format(len(station_items) - 1, station_id) )

	network = t.public.Network(len(station_items))
	with network.populate():
		for station_id, name in station_items:
			network.add_station(normalize_name(name, conf), station_id)

		def station_ref(ref):
			if isinstance(ref, int) and not isinstance(ref, bool):
				if 0 <= ref < len(network): return ref
				raise t.public.UnknownStationError(ref)
			return network.station_id(normalize_name(ref, conf))

		for edge in edges:
			try: a, b, weight = edge
			except (TypeError, ValueError):
				raise t.public.NetworkError('Edge must be an [a, b, weight] triplet: {!r}'.format(edge))
			if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
				raise t.public.NetworkError(
					'Edge weight must be a positive integer: {!r}'.format(edge) )
			a, b = map(station_ref, [a, b])
			network.add_edge(a, b, weight)

	log.debug( 'Built network: stations={:,}, edges={:,}',
		len(network), network.stat_edge_count() )
	return network


def parse_network(src, conf=None):
	'''Parse YAML network description from file path or stream.
		Expected format is a mapping with "stations" and "edges" keys,
			same as build_network() arguments.'''
	try:
		if isinstance(src, (str, Path)):
			with Path(src).open() as src_file: data = yaml.safe_load(src_file)
		else: data = yaml.safe_load(src)
	except yaml.YAMLError as err:
		raise t.public.NetworkError('Failed to parse network YAML: {}'.format(err)) from None
	if not isinstance(data, dict) or not {'stations', 'edges'}.issubset(data):
		raise t.public.NetworkError('Network data must be a mapping with "stations" and "edges" keys')
	return build_network(data['stations'], data['edges'] or list(), conf)

def reference_network(conf=None):
	return build_network(reference_stations, reference_edges, conf)
