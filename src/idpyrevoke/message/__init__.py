import json
import logging
from collections.abc import MutableMapping
from urllib.parse import urlencode

from cryptojwt.utils import as_unicode

from idpyrevoke.exception import DecodeError
from idpyrevoke.exception import FormatError
from idpyrevoke.exception import MessageException
from idpyrevoke.exception import MissingRequiredAttribute
from idpyrevoke.exception import NotAllowedValue

logger = logging.getLogger(__name__)

ERRTXT = "On '%s': %s"


class Message(MutableMapping):
    """
    A protocol message. The parameters it knows about, their types and
    whether they are required are listed in c_param. Parameters that are
    not listed are kept as they are.
    """

    c_param = {}
    c_allowed_values = {}

    def __init__(self, **kwargs):
        self._dict = {}
        self.from_dict(kwargs)

    def __iter__(self):
        return iter(self._dict)

    def type(self):
        return self.__class__.__name__

    def _param_spec(self, key):
        return self.c_param.get(key, self.c_param.get("*"))

    def to_urlencoded(self):
        """
        Creates a string using the application/x-www-form-urlencoded format.
        Empty strings are kept, None values are left out.

        :return: A string of the application/x-www-form-urlencoded format
        """
        for attribute, (_, req, _, _, _) in self.c_param.items():
            if req and attribute not in self._dict:
                raise MissingRequiredAttribute("%s" % attribute, "%s" % self)

        params = []
        for key, val in self._dict.items():
            if val is None:
                continue
            if isinstance(val, str):
                params.append((key, val.encode("utf-8")))
            else:
                params.append((key, str(val)))

        return urlencode(params)

    def to_dict(self, lev=0):
        """
        Return a dictionary representation of the class

        :return: A dict
        """
        _res = {}
        lev += 1
        for key, val in self._dict.items():
            _spec = self._param_spec(str(key))
            _ser = _spec[2] if _spec else None

            if _ser:
                val = _ser(val, "dict", lev)

            if isinstance(val, Message):
                _res[key] = val.to_dict(lev + 1)
            else:
                _res[key] = val

        return _res

    def from_dict(self, dictionary, **kwargs):
        """
        Direct translation, so the value for one key might be a list or a
        single value. Keys with empty values are skipped.

        :param dictionary: The info
        :return: A class instance or raise an exception on error
        """
        for key, val in dictionary.items():
            if val in ["", [""]]:
                continue

            skey = str(key)
            _spec = self._param_spec(skey)
            if _spec is None:
                self._dict[key] = val
                continue

            (vtyp, _, _, _deser, null_allowed) = _spec
            self._add_value(skey, vtyp, key, val, _deser, null_allowed)
        return self

    def _add_value(self, skey, vtyp, key, val, _deser, null_allowed):
        """
        Main method for adding a value to the instance. Does all the
        checking on type of value.

        :param skey: string version of the key
        :param vtyp: Type of value
        :param key: original representation of the key
        :param val: The value to add
        :param _deser: A deserializer for this value type
        :param null_allowed: Whether null is an allowed value for this key
        """
        if isinstance(val, list):
            if (len(val) == 0 or val[0] is None) and null_allowed is False:
                return

        if isinstance(vtyp, list):
            if val is None:
                if null_allowed:
                    self._dict[key] = val
                    return
                raise ValueError("Null is not allowed")

            vtype = vtyp[0]
            if isinstance(val, (vtype, list)):
                if _deser:
                    try:
                        val = _deser(val, sformat="dict")
                    except Exception as exc:
                        raise DecodeError(ERRTXT % (key, exc))

                for v in val:
                    if not isinstance(v, vtype):
                        raise DecodeError(ERRTXT % (key, "type != %s (%s)" % (vtype, type(v))))

                self._dict[skey] = val
            else:
                raise DecodeError(ERRTXT % (key, "type != %s" % vtype))
        else:
            if val is None:
                self._dict[skey] = None
            elif isinstance(val, bool):
                raise ValueError('"{}", wrong type of value for "{}"'.format(val, skey))
            elif isinstance(val, vtyp):
                self._dict[skey] = val
            elif _deser:
                try:
                    self._dict[skey] = _deser(val, sformat="dict")
                except Exception as exc:
                    raise DecodeError(ERRTXT % (key, exc))
            else:
                raise ValueError('"{}", wrong type of value for "{}"'.format(val, skey))

    def to_json(self, indent=None):
        """
        Serialize the content of this instance into a JSON string.

        :param indent: Number of spaces that should be used for indentation
        """
        return json.dumps(self.to_dict(1), indent=indent)

    def from_json(self, txt, **kwargs):
        """
        Convert from a JSON string to an instance of this class.

        :param txt: The JSON string (a ``str``, ``bytes`` or ``bytearray``
            instance containing a JSON document)
        :return: The instantiated instance
        """
        _dict = json.loads(as_unicode(txt))
        if not isinstance(_dict, dict):
            raise FormatError("Expected a JSON object")
        return self.from_dict(_dict)

    def __str__(self):
        return "{}".format(self.to_dict())

    @staticmethod
    def _type_check(typ, _allowed, val):
        if isinstance(typ, list):
            return all(item in _allowed for item in val)
        return val in _allowed

    def verify(self, **kwargs):
        """
        Make sure all the required values are there and that the values are
        among the allowed ones
        """
        for (attribute, (typ, required, _, _, _)) in self.c_param.items():
            if attribute == "*":
                continue

            val = self._dict.get(attribute)
            if not val:
                if required:
                    raise MissingRequiredAttribute("%s" % attribute)
                continue

            try:
                _allowed_val = self.c_allowed_values[attribute]
            except KeyError:
                pass
            else:
                if not self._type_check(typ, _allowed_val, val):
                    raise NotAllowedValue(val)

        return True

    def __getitem__(self, item):
        return self._dict[item]

    def __contains__(self, item):
        return item in self._dict

    def __setitem__(self, key, value):
        try:
            (vtyp, _, _, _deser, na) = self.c_param[key]
        except KeyError:
            self._dict[key] = value
        else:
            self._add_value(str(key), vtyp, key, value, _deser, na)

    def __eq__(self, other):
        """
        Two messages are equal if they are of the same type and carry the
        same parameters.
        """
        if not isinstance(other, Message):
            return False
        if self.type() != other.type():
            return False
        return self._dict == other._dict

    def __delitem__(self, key):
        del self._dict[key]

    def __len__(self):
        return len(self._dict)


# =============================================================================


def list_serializer(vals, sformat="dict", lev=0):
    if isinstance(vals, str):
        return [vals]
    if not isinstance(vals, list):
        raise ValueError("Expected list: %s" % vals)
    return vals


def list_deserializer(val, sformat="dict"):
    if isinstance(val, str):
        return [val]
    return val


def msg_ser(inst, sformat="dict", lev=0):
    if isinstance(inst, Message):
        return inst.to_dict(lev)
    if isinstance(inst, dict):
        return inst
    raise MessageException("Wrong type: %s" % type(inst))


SINGLE_REQUIRED_STRING = (str, True, None, None, False)
SINGLE_OPTIONAL_STRING = (str, False, None, None, False)

OPTIONAL_LIST_OF_STRINGS = ([str], False, list_serializer, list_deserializer, False)
REQUIRED_LIST_OF_STRINGS = ([str], True, list_serializer, list_deserializer, False)
