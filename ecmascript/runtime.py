import logging
import math
from math import isinf, isnan, copysign

from .numbers import inf, neginf, nan, stringToNumber, numberToString

logger = logging.getLogger(__name__)


class JavaScriptNull(object):
	__slots__ = []
	def __bool__(self):
		return False
	def __repr__(self):
		return 'null'

class Absent(object):
	"""Marks a descriptor field that was not supplied."""
	__slots__ = []
	def __bool__(self):
		return False
	def __repr__(self):
		return 'absent'

undefined = None
null = JavaScriptNull()
absent = Absent()


## Exceptions

class JavaScriptException(Exception):
	def __init__(self, value):
		super(JavaScriptException, self).__init__(value)
		self.value = value

class JavaScriptTypeError(JavaScriptException, TypeError):
	name = 'TypeError'
	def __str__(self):
		return '%s: %s' % (self.name, self.value)

class RejectedDefinition(JavaScriptTypeError):
	def __init__(self, key, reason):
		super(RejectedDefinition, self).__init__(
			'Cannot define property %s: %s' % (key, reason))
		self.key = key
		self.reason = reason

def reject(key, reason, throw):
	logger.debug('rejected definition of %r: %s', key, reason)
	if throw:
		raise RejectedDefinition(key, reason)
	return False


## Types

def typeOf(value):
	if value is None:
		return 'Undefined'
	if value is null:
		return 'Null'
	if isinstance(value, bool):
		return 'Boolean'
	if isinstance(value, str):
		return 'String'
	if isinstance(value, (int, float)):
		return 'Number'
	return 'Object'

def isPrimitive(value):
	return typeOf(value) != 'Object'

def isCallable(value):
	return isinstance(value, JavaScriptFunction)

def call(function, this=None, args=()): # [[Call]]
	if not isCallable(function):
		raise JavaScriptTypeError(
			'%s is not a function' % typeOf(function))
	return function.call(this, list(args))


## Type Conversion

def toPrimitive(value, preferred=None):
	if isPrimitive(value):
		return value
	return value.default_value(preferred)

def toBoolean(value):
	type = typeOf(value)
	if type == 'Boolean':
		return value
	if type == 'Number':
		value = toNumber(value)
		return not (value == 0 or isnan(value))
	if type == 'String':
		return len(value) > 0
	return type == 'Object'

def toNumber(value):
	type = typeOf(value)
	if type == 'Undefined':
		return nan
	if type == 'Null':
		return 0.0
	if type == 'Boolean':
		return 1.0 if value else 0.0
	if type == 'Number':
		try:
			return float(value)
		except OverflowError:
			return inf if value > 0 else neginf
	if type == 'String':
		return stringToNumber(value)
	return toNumber(toPrimitive(value, 'Number'))

def toInteger(value):
	number = toNumber(value)
	if isnan(number):
		return 0.0
	if number == 0 or isinf(number):
		return number
	return copysign(math.floor(abs(number)), number)

def _modulo(value, modulus):
	number = toNumber(value)
	if isnan(number) or isinf(number) or number == 0:
		return 0
	# int() truncates towards zero, i.e. sign(n) * floor(abs(n)), and python's
	# % always yields the non-negative residue
	return int(number) % modulus

def toInt32(value):
	value = _modulo(value, 4294967296) # 2^32
	return float(value if value < 2147483648 else value - 4294967296)

def toUint32(value):
	return float(_modulo(value, 4294967296)) # 2^32

def toUint16(value):
	return float(_modulo(value, 65536)) # 2^16

def toString(value):
	type = typeOf(value)
	if type == 'Undefined':
		return 'undefined'
	if type == 'Null':
		return 'null'
	if type == 'Boolean':
		return 'true' if value else 'false'
	if type == 'Number':
		return numberToString(toNumber(value))
	if type == 'String':
		return value
	return toString(toPrimitive(value, 'String'))

def toObject(value, realm=None):
	type = typeOf(value)
	if type == 'Undefined' or type == 'Null':
		raise JavaScriptTypeError(
			'%s cannot be converted to an object' % toString(value))
	prototype = lambda o: getattr(realm, o + '_prototype') if realm else null
	if type == 'Boolean':
		return JavaScriptBoolean(prototype('boolean'), value)
	if type == 'Number':
		return JavaScriptNumber(prototype('number'), toNumber(value))
	if type == 'String':
		return JavaScriptString(prototype('string'), value)
	return value

def checkObjectCoercible(value):
	if value is None or value is null:
		raise JavaScriptTypeError(
			'%s is not coercible to an object' % toString(value))


## Comparisons

def sameValue(x, y):
	type = typeOf(x)
	if type != typeOf(y):
		return False
	if type == 'Undefined' or type == 'Null':
		return True
	if type == 'Number':
		x, y = toNumber(x), toNumber(y)
		if isnan(x) and isnan(y):
			return True
		if x == 0 and y == 0:
			return copysign(1, x) == copysign(1, y)
		return x == y
	if type == 'Object':
		return x is y
	return x == y

def strictlyEqual(x, y):
	type = typeOf(x)
	if type != typeOf(y):
		return False
	if type == 'Undefined' or type == 'Null':
		return True
	if type == 'Number':
		return x == y
	if type == 'Object':
		return x is y
	return x == y


## Property Descriptors

class PropertyDescriptor(object):
	fields = ('enumerable', 'configurable', 'value', 'writable', 'get', 'set')
	__slots__ = fields

	def __init__(self, value=absent, writable=absent, get=absent, set=absent,
			enumerable=absent, configurable=absent):
		if (value is not absent or writable is not absent) \
				and (get is not absent or set is not absent):
			raise JavaScriptTypeError('Invalid property descriptor. '
				'Cannot both specify accessors and a value or writable attribute')
		for accessor in (get, set):
			if accessor is not absent and accessor is not None \
					and not isCallable(accessor):
				raise JavaScriptTypeError(
					'Getter and setter must be functions, not %s'
					% typeOf(accessor))
		self.value = value
		self.writable = writable if writable is absent else toBoolean(writable)
		self.get = get
		self.set = set
		self.enumerable = \
			enumerable if enumerable is absent else toBoolean(enumerable)
		self.configurable = \
			configurable if configurable is absent else toBoolean(configurable)

	def has(self, field):
		return getattr(self, field) is not absent

	def present(self):
		return [field for field in self.fields if self.has(field)]

	def copy(self):
		return PropertyDescriptor(
			**dict((field, getattr(self, field)) for field in self.present()))

	def __repr__(self):
		return '<PropertyDescriptor %s>' % ', '.join(
			'%s=%r' % (field, getattr(self, field)) for field in self.present())

def createDataProperty(value=None, writable=False, enumerable=False,
		configurable=False):
	return PropertyDescriptor(value=value, writable=toBoolean(writable),
		enumerable=toBoolean(enumerable), configurable=toBoolean(configurable))

def createAccessorProperty(get=None, set=None, enumerable=False,
		configurable=False):
	return PropertyDescriptor(get=get, set=set,
		enumerable=toBoolean(enumerable), configurable=toBoolean(configurable))

def isAccessorDescriptor(desc):
	if desc is None:
		return False
	return desc.has('get') or desc.has('set')

def isDataDescriptor(desc):
	if desc is None:
		return False
	return desc.has('value') or desc.has('writable')

def isGenericDescriptor(desc):
	if desc is None:
		return False
	return not isAccessorDescriptor(desc) and not isDataDescriptor(desc)

def fromPropertyDescriptor(desc, realm=None):
	if desc is None:
		return None
	o = realm.create_object() if realm else JavaScriptObject()
	# absent fields get no property
	for field in desc.present():
		o.define_own_property(field,
			createDataProperty(getattr(desc, field), True, True, True), False)
	return o

def toPropertyDescriptor(o):
	if typeOf(o) != 'Object':
		raise JavaScriptTypeError(
			'Property description must be an object: %s' % toString(o))
	fields = {}
	for field in PropertyDescriptor.fields:
		if field in o:
			fields[field] = o[field]
	return PropertyDescriptor(**fields)


## Native Objects

class JavaScriptObject(object):
	name = 'Object' # [[Class]]

	def __init__(self, prototype=None, extensible=True):
		self.prototype = prototype # [[Prototype]]
		self.extensible = extensible # [[Extensible]]
		self.properties = {}

	def get_own_property(self, key): # [[GetOwnProperty]]
		prop = self.properties.get(key)
		if prop is None:
			return None
		return prop.copy()

	def get_property(self, key): # [[GetProperty]]
		seen = set()
		o = self
		while o:
			if id(o) in seen:
				logger.warning('prototype cycle while looking up %r', key)
				return None
			seen.add(id(o))
			prop = o.get_own_property(key)
			if prop is not None:
				return prop
			o = o.prototype
		return None

	def __getitem__(self, key): # [[Get]]
		desc = self.get_property(key)
		if desc is None:
			return None
		if isDataDescriptor(desc):
			return desc.value
		if desc.get is None:
			return None
		return call(desc.get, self)

	def __setitem__(self, key, value):
		self.put(key, value)

	def __contains__(self, key): # [[HasProperty]]
		return self.get_property(key) is not None

	def has_property(self, key):
		return key in self

	def can_put(self, key): # [[CanPut]]
		desc = self.get_own_property(key)
		if desc is not None:
			if isAccessorDescriptor(desc):
				return desc.set is not None
			return desc.writable
		if not self.prototype:
			return self.extensible
		inherited = self.prototype.get_property(key)
		if inherited is None:
			return self.extensible
		if isAccessorDescriptor(inherited):
			return inherited.set is not None
		if not self.extensible:
			return False
		return inherited.writable

	def put(self, key, value, throw=False): # [[Put]]
		if not self.can_put(key):
			return reject(key, 'property is not writable', throw)
		if isDataDescriptor(self.get_own_property(key)):
			return self.define_own_property(key,
				PropertyDescriptor(value=value), throw)
		desc = self.get_property(key)
		if isAccessorDescriptor(desc):
			call(desc.set, self, [value])
			return True
		return self.define_own_property(key,
			createDataProperty(value, True, True, True), throw)

	def prevent_extensions(self):
		self.extensible = False
		return self

	def default_value(self, hint=None): # [[DefaultValue]]
		if hint is None:
			hint = 'String' if self.name == 'Date' else 'Number'
		if hint == 'String':
			methods = ('toString', 'valueOf')
		elif hint == 'Number':
			methods = ('valueOf', 'toString')
		else:
			raise ValueError('unknown hint %r' % hint)
		for method in methods:
			function = self[method]
			if isCallable(function):
				value = call(function, self)
				if isPrimitive(value):
					return value
		raise JavaScriptTypeError('Cannot convert object to primitive value')

	def define_own_property(self, key, desc, throw=False): # [[DefineOwnProperty]]
		current = self.get_own_property(key)

		if current is None:
			if not self.extensible:
				return reject(key, 'object is not extensible', throw)
			fields = dict((field, getattr(desc, field))
				for field in desc.present())
			if isAccessorDescriptor(desc):
				self.properties[key] = createAccessorProperty(**fields)
			else:
				self.properties[key] = createDataProperty(**fields)
			return True

		present = desc.present()
		if not present:
			return True
		if all(current.has(field)
				and sameValue(getattr(desc, field), getattr(current, field))
				for field in present):
			return True

		if not current.configurable:
			if desc.configurable is True:
				return reject(key, 'property is not configurable', throw)
			if desc.has('enumerable') \
					and desc.enumerable != current.enumerable:
				return reject(key, 'cannot change enumerable', throw)

		if isGenericDescriptor(desc):
			pass
		elif isDataDescriptor(current) != isDataDescriptor(desc):
			if not current.configurable:
				return reject(key, 'cannot change property kind', throw)
			# the rest of the attributes reset to their defaults
			if isDataDescriptor(current):
				converted = createAccessorProperty(
					enumerable=current.enumerable,
					configurable=current.configurable)
			else:
				converted = createDataProperty(
					enumerable=current.enumerable,
					configurable=current.configurable)
			self.properties[key] = converted
		elif isDataDescriptor(current):
			if not current.configurable and not current.writable:
				if desc.writable is True:
					return reject(key, 'cannot make writable', throw)
				if desc.has('value') \
						and not sameValue(desc.value, current.value):
					return reject(key, 'property is read-only', throw)
		elif not current.configurable:
			if desc.has('set') and not sameValue(desc.set, current.set):
				return reject(key, 'cannot change setter', throw)
			if desc.has('get') and not sameValue(desc.get, current.get):
				return reject(key, 'cannot change getter', throw)

		prop = self.properties[key]
		for field in present:
			setattr(prop, field, getattr(desc, field))
		return True

	def __repr__(self):
		return '<%s object>' % self.name

def get(o, key): # [[Get]]
	return o[toString(key)]

def defineOwnProperty(o, key, desc, throw=False): # [[DefineOwnProperty]]
	return o.define_own_property(toString(key), desc, throw)


class JavaScriptBoolean(JavaScriptObject):
	name = 'Boolean'
	def __init__(self, prototype=None, value=False):
		super(JavaScriptBoolean, self).__init__(prototype)
		self.value = value # [[PrimitiveValue]]

class JavaScriptNumber(JavaScriptObject):
	name = 'Number'
	def __init__(self, prototype=None, value=0.0):
		super(JavaScriptNumber, self).__init__(prototype)
		self.value = value

class JavaScriptString(JavaScriptObject):
	name = 'String'
	def __init__(self, prototype=None, value=''):
		super(JavaScriptString, self).__init__(prototype)
		self.value = value
		self.define_own_property('length',
			createDataProperty(float(len(value))), True)

class JavaScriptDate(JavaScriptObject):
	name = 'Date'
	def __init__(self, prototype=None, value=nan):
		super(JavaScriptDate, self).__init__(prototype)
		self.value = value # time value, ms since the epoch

def primitiveValue(this, type):
	"""The primitive behind `this` for the Boolean/Number/String/Date
	prototype methods."""
	if typeOf(this) == type:
		return this
	if typeOf(this) == 'Object' and this.name == type:
		return this.value
	raise JavaScriptTypeError(
		'%s.prototype method called on incompatible receiver' % type)


## Functions

class JavaScriptFunction(JavaScriptObject):
	name = 'Function'

	def call(self, this, args): # [[Call]]
		raise NotImplementedError

class NativeFunction(JavaScriptFunction):
	"""Adapts a python callable fn(this, args, realm) to [[Call]]."""

	def __init__(self, fn, length=0, name=None, prototype=None, realm=None):
		super(NativeFunction, self).__init__(prototype)
		self.fn = fn
		self.function_name = name or getattr(fn, '__name__', None)
		self.realm = realm
		self.define_own_property('length',
			createDataProperty(float(length)), True)

	def call(self, this, args):
		return self.fn(this, args, self.realm)

	def __repr__(self):
		return '<native function %s>' % self.function_name


class NativeFunctionWrapper(object):
	def __init__(self, function, length, name):
		self.function = function
		self.length = length
		self.name = name

def native(fn=None, length=0, name=None):
	def bind(fn):
		return NativeFunctionWrapper(fn, length, name or fn.__name__)
	return bind(fn) if fn else bind

class NativeFunctions(type):
	def __new__(mcs, name, bases, dict):
		functions = {}
		for key, function in list(dict.items()):
			if isinstance(function, NativeFunctionWrapper):
				del dict[key]
				functions[function.name] = function
		dict['functions'] = functions
		return type.__new__(mcs, name, bases, dict)

class JavaScriptNativePrototype(JavaScriptObject, metaclass=NativeFunctions):
	def bind(self, function_prototype, realm=None):
		for name, wrapper in self.functions.items():
			function = NativeFunction(wrapper.function, wrapper.length,
				wrapper.name, function_prototype, realm)
			self.define_own_property(name,
				createDataProperty(function, True, False, True), True)
		return self
