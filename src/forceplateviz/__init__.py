"""Force plate visualization: plate proxy, force/moment arrows and debug overlays."""
