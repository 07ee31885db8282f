import math
import unittest

from ecmascript import Realm, RealmClosed, JavaScriptTypeError, \
	RejectedDefinition, toObject, toPrimitive, toNumber, toString, call, \
	null, inf, neginf, nan, createDataProperty, fromPropertyDescriptor, \
	toPropertyDescriptor, JavaScriptDate

class Intrinsics(unittest.TestCase):
	def setUp(self):
		self.realm = Realm()

	def tearDown(self):
		self.realm.close()

	def test_prototypes(self):
		realm = self.realm
		self.assertIs(realm.object_prototype.prototype, null)
		self.assertIs(realm.function_prototype.prototype, realm.object_prototype)
		self.assertIs(toObject(1.5, realm).prototype, realm.number_prototype)
		self.assertIs(toObject('a', realm).prototype, realm.string_prototype)
		self.assertIs(toObject(True, realm).prototype, realm.boolean_prototype)
		self.assertIs(realm.to_object(False).prototype, realm.boolean_prototype)

	def test_native_attributes(self):
		desc = self.realm.object_prototype.get_own_property('toString')
		self.assertTrue(desc.writable)
		self.assertFalse(desc.enumerable)
		self.assertTrue(desc.configurable)
		self.assertEqual(desc.value['length'], 0)
		self.assertIs(desc.value.prototype, self.realm.function_prototype)

	def test_wrapper_conversions(self):
		realm = self.realm
		self.assertEqual(toString(toObject(True, realm)), 'true')
		self.assertEqual(toNumber(toObject('12', realm)), 12)
		self.assertEqual(toNumber(toObject(2.5, realm)), 2.5)
		self.assertEqual(toString(toObject(2.5, realm)), '2.5')
		self.assertEqual(toPrimitive(toObject('s', realm)), 's')

	def test_object_to_string(self):
		o = self.realm.create_object()
		self.assertEqual(toString(o), '[object Object]')
		self.assertTrue(math.isnan(toNumber(o)))
		f = self.realm.object_prototype['toString']
		self.assertEqual(call(f, None), '[object Undefined]')
		self.assertEqual(call(f, null), '[object Null]')
		self.assertEqual(call(f, 1.0), '[object Number]')

	def test_incompatible_receiver(self):
		valueOf = self.realm.boolean_prototype['valueOf']
		self.assertRaises(JavaScriptTypeError,
			call, valueOf, self.realm.create_object())
		self.assertIs(call(valueOf, True), True)
		self.assertIs(call(valueOf, self.realm.boolean_prototype), False)

	def test_has_own_property(self):
		o = self.realm.create_object()
		o['x'] = 1.0
		child = self.realm.create_object(o)
		hasOwnProperty = o['hasOwnProperty']
		self.assertTrue(call(hasOwnProperty, o, ['x']))
		self.assertFalse(call(hasOwnProperty, child, ['x']))
		self.assertTrue(call(o['propertyIsEnumerable'], o, ['x']))
		self.assertFalse(call(o['propertyIsEnumerable'], o, ['hasOwnProperty']))
		self.assertTrue(call(hasOwnProperty, 'ab', ['length']))

	def test_is_prototype_of(self):
		o = self.realm.create_object()
		child = self.realm.create_object(o)
		isPrototypeOf = o['isPrototypeOf']
		self.assertTrue(call(isPrototypeOf, o, [child]))
		self.assertTrue(call(isPrototypeOf, self.realm.object_prototype, [child]))
		self.assertFalse(call(isPrototypeOf, child, [o]))
		self.assertFalse(call(isPrototypeOf, o, [1.0]))

	def test_dates(self):
		d = self.realm.create_date(0)
		self.assertEqual(toPrimitive(d), 'Thu Jan 01 1970 00:00:00 GMT+0000')
		self.assertEqual(toPrimitive(d, 'Number'), 0)
		self.assertEqual(toNumber(d), 0)
		self.assertEqual(call(d['getTime'], d), 0)
		self.assertEqual(toString(self.realm.create_date()), 'Invalid Date')
		d = self.realm.create_date(1.9)
		self.assertEqual(call(d['getTime'], d), 1)

	def test_distant_dates(self):
		create = self.realm.create_date
		self.assertEqual(toString(create(253402300800000.0)),
			'Sat Jan 01 10000 00:00:00 GMT+0000')
		self.assertEqual(toString(create(8.64e15)),
			'Sat Sep 13 275760 00:00:00 GMT+0000')
		self.assertEqual(toPrimitive(create(-8.64e15)),
			'Tue Apr 20 -271821 00:00:00 GMT+0000')
		self.assertEqual(toString(create(-1)),
			'Wed Dec 31 1969 23:59:59 GMT+0000')

	def test_out_of_range_dates(self):
		for value in (8.64e15 + 1, -8.64e15 - 1, inf, neginf, nan):
			d = self.realm.create_date(value)
			self.assertTrue(math.isnan(toNumber(d)), value)
			self.assertEqual(toString(d), 'Invalid Date')
			self.assertEqual(toPrimitive(d), 'Invalid Date')
		d = JavaScriptDate(self.realm.date_prototype, inf)
		self.assertEqual(toString(d), 'Invalid Date')

	def test_functions(self):
		f = self.realm.create_function(
			lambda this, args, realm: float(len(args)), 2, 'count')
		self.assertEqual(f['length'], 2)
		self.assertEqual(call(f, None, [1.0]), 1)
		self.assertEqual(call(f['call'], f, [None, 1.0, 2.0]), 2)
		self.assertEqual(call(f['apply'], f, [None]), 0)
		arguments = self.realm.create_object()
		arguments['length'] = 3.0
		self.assertEqual(call(f['apply'], f, [None, arguments]), 3)
		self.assertRaises(JavaScriptTypeError, call, f['apply'], f, [None, 1.0])
		self.assertEqual(toString(f), 'function () { [native code] }')
		self.assertIs(call(self.realm.function_prototype, None), None)

	def test_receiver(self):
		f = self.realm.create_function(lambda this, args, realm: this)
		o = self.realm.create_object()
		self.assertIs(call(f['call'], f, [o]), o)
		self.assertIs(call(f, o), o)

	def test_descriptor_objects(self):
		o = fromPropertyDescriptor(createDataProperty(1.0), self.realm)
		self.assertIs(o.prototype, self.realm.object_prototype)
		self.assertEqual(toPropertyDescriptor(o).value, 1.0)

class Registry(unittest.TestCase):
	def test_register(self):
		realm = Realm()
		o = realm.create_object()
		self.assertIs(realm.register('thing', o), o)
		self.assertIs(realm.lookup('thing'), o)
		self.assertTrue('thing' in realm)
		self.assertFalse('other' in realm)
		self.assertIs(realm.lookup('other'), None)
		desc = realm.global_object.get_own_property('thing')
		self.assertTrue(desc.writable)
		self.assertFalse(desc.enumerable)
		self.assertTrue(desc.configurable)
		realm.register('thing', 1.0)
		self.assertEqual(realm.lookup('thing'), 1.0)

	def test_register_rejected(self):
		realm = Realm()
		realm.global_object.define_own_property('fixed',
			createDataProperty(1.0), True)
		self.assertRaises(RejectedDefinition, realm.register, 'fixed', 2.0)

	def test_separate(self):
		a, b = Realm(), Realm()
		a.register('x', 1.0)
		self.assertIs(b.lookup('x'), None)
		self.assertIsNot(a.object_prototype, b.object_prototype)

	def test_close(self):
		realm = Realm()
		realm.register('x', 1.0)
		with self.assertLogs('ecmascript.realm', 'DEBUG'):
			realm.close()
		self.assertTrue(realm.closed)
		self.assertRaises(RealmClosed, realm.lookup, 'x')
		self.assertRaises(RealmClosed, realm.register, 'y', 1.0)
		self.assertRaises(RealmClosed, realm.create_object)
		self.assertRaises(RealmClosed, realm.create_function, None)
		self.assertRaises(RealmClosed, realm.to_object, 1.0)
		realm.close()

	def test_context_manager(self):
		with Realm() as realm:
			realm.register('x', 1.0)
			self.assertEqual(realm.lookup('x'), 1.0)
		self.assertTrue(realm.closed)
		self.assertRaises(RealmClosed, realm.lookup, 'x')

def suite():
	suite = unittest.TestSuite([
		unittest.TestLoader().loadTestsFromTestCase(Intrinsics),
		unittest.TestLoader().loadTestsFromTestCase(Registry),
		])
	return suite

if __name__ == '__main__':
	unittest.main()
