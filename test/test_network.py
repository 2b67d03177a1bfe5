import itertools as it, operator as op, functools as ft
import io
import unittest

from . import _common as c


network, NetworkError = c.mr.network, c.mr.t.public.NetworkError


class NetworkLoaderTests(unittest.TestCase):

	def test_normalize_name(self):
		self.assertEqual(network.normalize_name('  rajiv   chowk '), 'RAJIV CHOWK')
		conf = network.NetworkConf(name_case='lower')
		self.assertEqual(network.normalize_name('Rajiv Chowk', conf), 'rajiv chowk')
		conf = network.NetworkConf(name_case=None)
		self.assertEqual(network.normalize_name('Rajiv  Chowk', conf), 'Rajiv Chowk')
		with self.assertRaises(ValueError):
			network.normalize_name('x', network.NetworkConf(name_case='title'))

	def test_build_from_mapping_and_ids(self):
		graph = network.build_network({1: 'b', 0: 'a', 2: 'c'}, [[0, 1, 2], ['b', 'c', 5]])
		self.assertEqual(graph.station_names(), ['A', 'B', 'C'])
		self.assertEqual(graph.edge_weight(1, 0), 2)
		self.assertEqual(graph.path_distance([0, 1, 2]), 7)
		self.assertIsNone(graph.edge_weight(0, 2))
		self.assertEqual(graph.path_distance([0, 2]), 0)
		self.assertEqual(graph[2].name, 'C')
		self.assertEqual(graph.stat_edge_count(), 2)

	def test_build_errors(self):
		for stations, edges in [
				(['A', 'A'], []),
				({0: 'A', 2: 'B'}, []),
				({'0': 'A'}, []),
				(['A', 'B'], [['A', 'B', 0]]),
				(['A', 'B'], [['A', 'B', 1.5]]),
				(['A', 'B'], [['A', 'B', True]]),
				(['A', 'B'], [['A', 'B']]),
				(['A', 'B'], [['A', 'C', 1]]),
				(['A', 'B'], [[0, 2, 1]]) ]:
			with self.assertRaises(NetworkError, msg=repr([stations, edges])):
				network.build_network(stations, edges)

	def test_unknown_edge_station(self):
		with self.assertRaises(c.mr.t.public.UnknownStationError):
			network.build_network(['A', 'B'], [['A', 'Z', 1]])

	def test_parse_stream(self):
		src = io.StringIO(
			'stations: [north, centre, south]\n'
			'edges:\n  - [north, centre, 3]\n  - [1, 2, 4]\n' )
		graph = network.parse_network(src)
		self.assertEqual(len(graph), 3)
		self.assertEqual(graph.station_id('SOUTH'), 2)
		self.assertEqual(list(graph.edges_from(1)), [(0, 3), (2, 4)])
		with self.assertRaises(NetworkError):
			network.parse_network(io.StringIO('- north\n- south\n'))

	def test_parse_malformed(self):
		for data in [
				'stations:\nedges: []\n',
				'stations: abc\nedges: []\n',
				'stations: [a, b]\nedges: ab\n',
				'stations: [a, null]\nedges: []\n',
				'stations: [a, 2]\nedges: []\n',
				'stations: [a\n',
				'stations: {0: a, 1: [b]}\nedges: []\n' ]:
			with self.assertRaises(NetworkError, msg=repr(data)):
				network.parse_network(io.StringIO(data))

	def test_sealed_after_build(self):
		graph = network.build_network(['A'], [])
		self.assertTrue(graph.sealed)
		with self.assertRaises(NetworkError): graph.add_station('B', 0)

	def test_reference_network(self):
		graph = network.reference_network(network.NetworkConf(name_case='lower'))
		self.assertEqual(graph.station_id('janpath'), 21)
		self.assertFalse(graph.is_valid_station('JANPATH'))
