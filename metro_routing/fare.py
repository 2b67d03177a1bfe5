### Fare calculation for routes through the network

import itertools as it, operator as op, functools as ft

from . import utils as u


@u.attr_struct(vals_to_attrs=True)
class FareConf:

	base_fare = 20

	# Per-distance-unit rate, banded by total route distance:
	#  (max_distance, rate) pairs in ascending order, zone_rate_max beyond last one.
	zone_rates = ((5, 1.0), (12, 1.5), (21, 2.0))
	zone_rate_max = 2.5

	# Discounts are multipliers, applied in order, and compound if both apply
	discount_student = 0.5
	discount_senior = 0.6

	rounding_step = 0.5

	# Simplified per-station rate for quick_estimate() quotes
	estimate_rate = 1.5


def zone_rate(distance, conf=None):
	conf = conf or FareConf()
	for distance_max, rate in conf.zone_rates:
		if distance <= distance_max: return rate
	return conf.zone_rate_max

def fare_for_distance(distance, student=False, senior=False, conf=None):
	'''Authoritative fare: base + distance * zone_rate,
		with rider discounts applied, rounded half-up to nearest conf.rounding_step.'''
	conf = conf or FareConf()
	fare = conf.base_fare + distance * zone_rate(distance, conf)
	if student: fare *= conf.discount_student
	if senior: fare *= conf.discount_senior
	return float(u.round_half_up(fare, conf.rounding_step))

def fare_for_path(network, path, student=False, senior=False, conf=None):
	if not path: return 0.0
	return fare_for_distance(network.path_distance(path), student, senior, conf)

def quick_estimate(path, conf=None):
	'''Quick price quote from station count alone, without discounts or zones.
		Does not match fare_for_path() values, and should not be used for billing.'''
	if not path: return 0.0
	conf = conf or FareConf()
	return float(conf.base_fare + len(path) * conf.estimate_rate)
