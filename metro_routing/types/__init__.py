from . import prio, public
