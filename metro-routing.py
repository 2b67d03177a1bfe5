#!/usr/bin/env python3

import itertools as it, operator as op, functools as ft
from pathlib import Path
import os, sys

import metro_routing as mr


def main(args=None):
	conf = mr.network.NetworkConf()
	conf_engine, conf_fare = mr.engine.EngineConf(), mr.fare.FareConf()

	import argparse
	parser = argparse.ArgumentParser(
		description='Route, fare and alternative-path queries for a fixed metro network.')

	group = parser.add_argument_group('Network options')
	group.add_argument('-n', '--network', metavar='path',
		help='YAML file with network description, with "stations" list'
				' (names, index = id) and "edges" list of [station-a, station-b, distance].'
			' Built-in 22-station reference network is used by default.')

	group = parser.add_argument_group('Passenger options')
	group.add_argument('--name', default='Passenger', help='Passenger name. Default: %(default)s')
	group.add_argument('--age', type=int, default=30,
		help='Passenger age (1-120), senior discount applies to 60+. Default: %(default)s')
	group.add_argument('--phone', default='0000000000',
		help='Passenger phone number, exactly 10 digits. Default: %(default)s')
	group.add_argument('--student', action='store_true', help='Apply student discount.')

	group = parser.add_argument_group('Misc/debug options')
	group.add_argument('--dot-for-network', metavar='path',
		help='Dump station graph (in graphviz dot format) to a specified file and exit.')
	group.add_argument('--dot-opts', metavar='yaml-data',
		help='Options for graphviz graph/nodes/edges to use with all'
			' --dot-* options, as a YAML mappings. Example: {graph: {rankdir: LR}}')
	group.add_argument('--engine-conf', metavar='yaml-data',
		help='Override values for EngineConf as a YAML mapping.'
			' Example: {cache_key_with_mode: true, max_alternative_routes: 5}')
	group.add_argument('--fare-conf', metavar='yaml-data',
		help='Override values for FareConf as a YAML mapping. Example: {base_fare: 30}')
	group.add_argument('--debug', action='store_true', help='Verbose operation mode.')

	cmds = parser.add_subparsers(title='Commands', dest='call')


	cmd = cmds.add_parser('stations', help='List all stations in the network.')


	cmd = cmds.add_parser('route', help='Show shortest route between two stations.')
	cmd.add_argument('station_from', help='Station name to start from. Example: "patel chowk"')
	cmd.add_argument('station_to', help='Destination station name. Example: "rajiv chowk"')
	cmd.add_argument('--hops', action='store_true',
		help='Find route with least number of stations instead of shortest distance.')
	cmd.add_argument('--dot-route', metavar='path',
		help='Dump station graph with highlighted route (in graphviz dot format) to a file.')


	cmd = cmds.add_parser('alternatives',
		help='Show shortest route and up to N alternatives to it within distance threshold.')
	cmd.add_argument('station_from', help='Station name to start from.')
	cmd.add_argument('station_to', help='Destination station name.')


	cmd = cmds.add_parser('min-transfer',
		help='Show route with least number of stations, its price estimate and passenger bill.')
	cmd.add_argument('station_from', help='Station name to start from.')
	cmd.add_argument('station_to', help='Destination station name.')


	cmd = cmds.add_parser('bill', help='Generate passenger bill for a trip.')
	cmd.add_argument('station_from', help='Station name to start from.')
	cmd.add_argument('station_to', help='Destination station name.')


	cmd = cmds.add_parser('change-route',
		help='Get off at a station on the route and continue to a new destination.')
	cmd.add_argument('station_from', help='Station name to start from.')
	cmd.add_argument('station_to', help='Original destination station name.')
	cmd.add_argument('station_mid', help='Station on the route to get off at.')
	cmd.add_argument('station_to_new', help='New destination station name.')


	cmd = cmds.add_parser('fare', help='Calculate fare for a trip, without passenger info.')
	cmd.add_argument('station_from', help='Station name to start from.')
	cmd.add_argument('station_to', help='Destination station name.')
	cmd.add_argument('--senior', action='store_true', help='Apply senior discount.')


	opts = parser.parse_args(sys.argv[1:] if args is None else args)

	mr.u.logging.basicConfig(
		format='%(asctime)s :: %(name)s %(levelname)s :: %(message)s',
		datefmt='%Y-%m-%d %H:%M:%S',
		level=mr.u.logging.DEBUG if opts.debug else mr.u.logging.WARNING )
	log = mr.u.get_logger('metro.cli')

	for conf_obj, conf_yaml in [(conf_engine, opts.engine_conf), (conf_fare, opts.fare_conf)]:
		if not conf_yaml: continue
		import yaml
		for k, v in (yaml.safe_load(conf_yaml) or dict()).items():
			if not hasattr(conf_obj, k):
				parser.error('Unrecognized {} option: {!r} (value: {!r})'.format(
					conf_obj.__class__.__name__, k, v ))
			setattr(conf_obj, k, v)

	try:
		network, router = mr.init_router( opts.network, conf=conf,
			conf_engine=conf_engine, conf_fare=conf_fare, timer_func=mr.calc_timer )
	except (OSError, mr.t.public.NetworkError) as err:
		parser.error('Failed to load network: {}'.format(err))

	dot_opts = dict()
	if opts.dot_opts:
		import yaml
		dot_opts = yaml.safe_load(opts.dot_opts)
	if opts.dot_for_network:
		with mr.u.safe_replacement(opts.dot_for_network) as dst:
			mr.vis.dot_for_network(network, dst, dot_opts=dot_opts)
		return

	station_args = list( k for k in
		['station_from', 'station_to', 'station_mid', 'station_to_new'] if hasattr(opts, k) )
	for k in station_args:
		name = mr.network.normalize_name(getattr(opts, k), conf)
		if not router.is_valid_station(name):
			print('Invalid station name: {}'.format(getattr(opts, k)))
			return 1
		setattr(opts, k, name)
	if len(station_args) >= 2 and opts.station_from == opts.station_to:
		print('Start and end stations cannot be the same.')
		return 1

	passenger = None
	if opts.call in ['min-transfer', 'bill', 'change-route']:
		try: passenger = mr.t.public.Passenger(opts.name, opts.age, opts.phone, opts.student)
		except mr.t.public.PassengerError as err: parser.error('Invalid passenger info: {}'.format(err))
	fare_func = router.route_fare

	if not opts.call or opts.call == 'stations':
		print('Available Stations:')
		for n, name in enumerate(router.station_names(), 1): print('{:2d}. {}'.format(n, name))

	elif opts.call == 'route':
		path = router.find_shortest_path(opts.station_from, opts.station_to, not opts.hops)
		if not path:
			print('No path found.')
			return 1
		route = router.route(path)
		print('Route: {}'.format(' -> '.join(route.details())))
		print('Distance: {} units'.format(route.distance))
		print('Price: {}'.format(fare_func(route, opts.student)))
		if opts.dot_route:
			with mr.u.safe_replacement(opts.dot_route) as dst:
				mr.vis.dot_for_network(network, dst, route=route, dot_opts=dot_opts)

	elif opts.call == 'alternatives':
		routes = router.query_alternative_routes(opts.station_from, opts.station_to)
		if not routes:
			print('No route found between {} and {}'.format(opts.station_from, opts.station_to))
			return 1
		routes.pretty_print(fare_func)

	elif opts.call == 'min-transfer':
		quote = router.query_minimal_transfer_path(passenger, opts.station_from, opts.station_to)
		if not quote.route:
			print('No path found.')
			return 1
		print('Minimal Transfer Path: {}'.format(' -> '.join(quote.route.details())))
		print('Price: {}'.format(quote.estimate))
		quote.bill.pretty_print()

	elif opts.call == 'bill':
		router.generate_bill(passenger, opts.station_from, opts.station_to).pretty_print()

	elif opts.call == 'change-route':
		if not router.is_on_path(opts.station_from, opts.station_mid, opts.station_to):
			print('Station {} does not lie on your path'.format(opts.station_mid))
			return 1
		change = router.change_route( passenger,
			opts.station_from, opts.station_mid, opts.station_to_new, opts.station_to )
		if change.quote.route:
			print('Minimal Transfer Path: {}'.format(' -> '.join(change.quote.route.details())))
			print('Price: {}'.format(change.quote.estimate))
		change.bill.pretty_print()

	elif opts.call == 'fare':
		print('Fare: {}'.format(router.calc_fare(
			opts.station_from, opts.station_to, opts.student, opts.senior )))

	else: parser.error('Action not implemented: {}'.format(opts.call))

	log.debug( 'Route cache: entries={:,}, hit-ratio={:.2f}',
		len(router.cache), router.cache.stat_hit_ratio() )

if __name__ == '__main__': sys.exit(main())
