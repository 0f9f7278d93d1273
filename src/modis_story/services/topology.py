"""
TopoJSON decoding.

Converts a topology-encoded boundary file into GeoJSON features.
"""

import logging
from typing import Any, Dict, List, Optional


class TopologyDecoder:
    """Decode TopoJSON objects into GeoJSON features."""

    def __init__(self, topology: Dict[str, Any], logger: Optional[logging.Logger] = None):
        """
        Initialize topology decoder.

        Args:
            topology: Parsed TopoJSON document
            logger: Logger instance

        Raises:
            ValueError: If the document is not a Topology
        """
        if not isinstance(topology, dict) or topology.get("type") != "Topology":
            raise ValueError("Not a TopoJSON Topology document")

        self.topology = topology
        self.logger = logger or logging.getLogger(__name__)

        transform = topology.get("transform")
        if transform:
            self._scale = transform["scale"]
            self._translate = transform["translate"]
        else:
            self._scale = None
            self._translate = None

        self._arcs = [self._decode_arc(arc) for arc in topology.get("arcs", [])]

    def _decode_arc(self, arc: List[List[float]]) -> List[List[float]]:
        """Absolute coordinates of one arc; quantized arcs are delta-encoded."""
        if self._scale is None:
            return [list(p) for p in arc]

        kx, ky = self._scale
        dx, dy = self._translate
        x = y = 0
        points = []
        for p in arc:
            x += p[0]
            y += p[1]
            points.append([x * kx + dx, y * ky + dy] + list(p[2:]))
        return points

    def _decode_point(self, p: List[float]) -> List[float]:
        """Absolute coordinates of a Point position (never delta-encoded)."""
        if self._scale is None:
            return list(p)
        kx, ky = self._scale
        dx, dy = self._translate
        return [p[0] * kx + dx, p[1] * ky + dy] + list(p[2:])

    def _line(self, arc_indexes: List[int]) -> List[List[float]]:
        """Stitch arcs into one line; ~i walks arc i backwards."""
        points: List[List[float]] = []
        for i in arc_indexes:
            arc = self._arcs[~i] if i < 0 else self._arcs[i]
            if i < 0:
                arc = arc[::-1]
            if points:
                # Shared endpoint with the previous arc
                points.pop()
            points.extend([list(p) for p in arc])
        if len(points) < 2 and points:
            points.append(list(points[0]))
        return points

    def _ring(self, arc_indexes: List[int]) -> List[List[float]]:
        points = self._line(arc_indexes)
        while points and len(points) < 4:
            points.append(list(points[0]))
        return points

    def _geometry(self, obj: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        kind = obj.get("type")
        if kind is None:
            return None

        if kind == "GeometryCollection":
            return {
                "type": "GeometryCollection",
                "geometries": [
                    g for g in (self._geometry(o) for o in obj.get("geometries", [])) if g
                ],
            }
        if kind == "Point":
            coordinates: Any = self._decode_point(obj["coordinates"])
        elif kind == "MultiPoint":
            coordinates = [self._decode_point(p) for p in obj["coordinates"]]
        elif kind == "LineString":
            coordinates = self._line(obj["arcs"])
        elif kind == "MultiLineString":
            coordinates = [self._line(a) for a in obj["arcs"]]
        elif kind == "Polygon":
            coordinates = [self._ring(a) for a in obj["arcs"]]
        elif kind == "MultiPolygon":
            coordinates = [[self._ring(a) for a in polygon] for polygon in obj["arcs"]]
        else:
            raise ValueError(f"Unsupported TopoJSON geometry type: {kind}")

        return {"type": kind, "coordinates": coordinates}

    def _feature(self, obj: Dict[str, Any]) -> Dict[str, Any]:
        feature: Dict[str, Any] = {
            "type": "Feature",
            "properties": obj.get("properties") or {},
            "geometry": self._geometry(obj),
        }
        if "id" in obj:
            feature["id"] = obj["id"]
        return feature

    def features(self, object_name: str) -> List[Dict[str, Any]]:
        """
        Decode a named topology object into GeoJSON features.

        A GeometryCollection yields one feature per member geometry.

        Args:
            object_name: Key under the topology's "objects"

        Returns:
            List of GeoJSON Feature dictionaries

        Raises:
            KeyError: If the object does not exist
        """
        objects = self.topology.get("objects", {})
        if object_name not in objects:
            raise KeyError(
                f"Topology object '{object_name}' not found. "
                f"Available objects: {', '.join(objects)}"
            )

        obj = objects[object_name]
        if obj.get("type") == "GeometryCollection":
            features = [self._feature(g) for g in obj.get("geometries", [])]
        else:
            features = [self._feature(obj)]

        self.logger.debug(f"Decoded {len(features)} features from '{object_name}'")
        return features


def features_by_name(features: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Key features by their properties.name.

    Features without a name are skipped.
    """
    return {
        f["properties"]["name"]: f
        for f in features
        if f.get("properties", {}).get("name")
    }
